from __future__ import annotations

from urllib.parse import quote

# encodeURIComponent leaves these unescaped
URI_COMPONENT_SAFE = "-_.!~*'()"


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def encode_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def is_safe_segment(value: str) -> bool:
    if not value or value in {".", ".."}:
        return False
    return "/" not in value and "\\" not in value and "\0" not in value
