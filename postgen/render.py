from __future__ import annotations

import html
import json
import re
from pathlib import Path

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")

JSON_SCRIPT_ESCAPES = {
    ord(">"): "\\u003E",
    ord("<"): "\\u003C",
    ord("&"): "\\u0026",
}


def escape_html(value: object) -> str:
    return html.escape(str(value))


def json_script(data: dict) -> str:
    blob = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return blob.translate(JSON_SCRIPT_ESCAPES)


def render_template(template: str, **context: str) -> str:
    # Single pass: substituted values are never scanned for placeholders again.
    def repl(match: re.Match) -> str:
        key = match.group(1)
        if key not in context:
            return match.group(0)
        return context[key]

    return PLACEHOLDER_RE.sub(repl, template)


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
