"""Run the render CLI with ``python -m render``."""

from render.cli import main

if __name__ == "__main__":
    main()
