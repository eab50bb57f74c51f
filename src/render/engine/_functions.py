# pyright: reportAny=false, reportExplicitAny=false
"""Helper functions available to every template.

These complement Jinja2's built-in filters with the string, encoding and
collection helpers commonly used when templating Kubernetes manifests.
Filters receive the piped value as their first argument.
"""

import base64
import gzip as _gzip
import hashlib
import ipaddress
import re
import uuid
from typing import Any

import orjson
import yaml
from jinja2 import Undefined


def to_yaml(value: Any) -> str:
    """Serialize a value as block-style YAML without a trailing newline."""
    return yaml.safe_dump(
        value, default_flow_style=False, sort_keys=False, allow_unicode=True
    ).rstrip("\n")


def from_yaml(text: str) -> Any:
    """Parse a YAML document."""
    return yaml.safe_load(text)


def to_json(value: Any) -> str:
    """Serialize a value as compact JSON."""
    return orjson.dumps(value).decode("utf-8")


def to_pretty_json(value: Any) -> str:
    """Serialize a value as JSON indented by two spaces."""
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8")


def from_json(text: str) -> Any:
    """Parse a JSON document."""
    return orjson.loads(text)


def b64enc(text: str) -> str:
    return base64.b64encode(str(text).encode("utf-8")).decode("ascii")


def b64dec(text: str) -> str:
    return base64.b64decode(str(text)).decode("utf-8")


def gzip(text: str) -> str:
    """Gzip-compress text and return the result base64-encoded."""
    compressed = _gzip.compress(str(text).encode("utf-8"), mtime=0)
    return base64.b64encode(compressed).decode("ascii")


def ungzip(text: str) -> str:
    """Reverse of `gzip`: decode base64, then decompress."""
    return _gzip.decompress(base64.b64decode(str(text))).decode("utf-8")


def sha1sum(text: str) -> str:
    return hashlib.sha1(str(text).encode("utf-8"), usedforsecurity=False).hexdigest()


def sha256sum(text: str) -> str:
    return hashlib.sha256(str(text).encode("utf-8")).hexdigest()


def quote(value: Any) -> str:
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def squote(value: Any) -> str:
    return f"'{value}'"


def nindent(text: str, width: int) -> str:
    """Indent every line of `text` by `width` spaces, preceded by a newline."""
    pad = " " * width
    return "\n" + "\n".join(pad + line if line else line for line in str(text).split("\n"))


def trim_prefix(text: str, prefix: str) -> str:
    return str(text).removeprefix(prefix)


def trim_suffix(text: str, suffix: str) -> str:
    return str(text).removesuffix(suffix)


def split_list(text: str, separator: str) -> list[str]:
    return str(text).split(separator)


def regex_match(text: str, pattern: str) -> bool:
    return re.search(pattern, str(text)) is not None


def regex_replace_all(text: str, pattern: str, replacement: str) -> str:
    return re.sub(pattern, replacement, str(text))


def required(value: Any, message: str = "required value is missing") -> Any:
    """Return `value`, failing when it is absent, None, or an empty string.

    Raises:
        ValueError: With `message` if the value is missing.
    """
    if isinstance(value, Undefined) or value is None or value == "":
        raise ValueError(message)
    return value


def ternary(condition: Any, true_value: Any, false_value: Any) -> Any:
    return true_value if condition else false_value


def cidr_host(prefix: str, hostnum: int) -> str:
    """Return the address of host number `hostnum` within network `prefix`.

    Negative host numbers count back from the end of the range.

    Example:
        >>> cidr_host("10.12.0.0/16", 5)
        '10.12.0.5'
    """
    network = ipaddress.ip_network(prefix, strict=False)
    index = hostnum if hostnum >= 0 else network.num_addresses + hostnum
    if not 0 <= index < network.num_addresses:
        msg = f"host number {hostnum} is out of range for {network}"
        raise ValueError(msg)
    return str(network.network_address + index)


def uuidv4() -> str:
    return str(uuid.uuid4())


FILTERS: dict[str, Any] = {
    "toYaml": to_yaml,
    "fromYaml": from_yaml,
    "toJson": to_json,
    "toPrettyJson": to_pretty_json,
    "fromJson": from_json,
    "b64enc": b64enc,
    "b64dec": b64dec,
    "gzip": gzip,
    "ungzip": ungzip,
    "sha1sum": sha1sum,
    "sha256sum": sha256sum,
    "quote": quote,
    "squote": squote,
    "nindent": nindent,
    "trimPrefix": trim_prefix,
    "trimSuffix": trim_suffix,
    "splitList": split_list,
    "regexMatch": regex_match,
    "regexReplaceAll": regex_replace_all,
    "required": required,
    "ternary": ternary,
    "cidrHost": cidr_host,
}

GLOBALS: dict[str, Any] = {
    "cidrHost": cidr_host,
    "uuidv4": uuidv4,
}
