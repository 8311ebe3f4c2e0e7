from __future__ import annotations

import enum
import html
import re

from .render import escape_html

HEADING_RES = (
    (re.compile(r"^###\s+"), "h3"),
    (re.compile(r"^##\s+"), "h2"),
    (re.compile(r"^#\s+"), "h1"),
)
LIST_ITEM_RE = re.compile(r"^-\s+")
LIST_MARKER_RE = re.compile(r"^-+\s+")

CODE_RE = re.compile(r"`([^`]+)`")
BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
ITALIC_RE = re.compile(r"\*([^*]+)\*")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
SAFE_URL_RE = re.compile(r"^(https?://|mailto:)", re.IGNORECASE)


class ListState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"


def is_safe_url(url: str) -> bool:
    return bool(SAFE_URL_RE.match(url.strip()))


def inline(text: str) -> str:
    # Escape before anything else. The substitutions below only wrap text
    # that is already escaped, so they cannot produce raw markup.
    out = escape_html(text)
    out = CODE_RE.sub(lambda m: f"<code>{escape_html(m.group(1))}</code>", out)
    out = BOLD_RE.sub(r"<b>\1</b>", out)
    out = ITALIC_RE.sub(r"<i>\1</i>", out)

    def link(match: re.Match) -> str:
        label = match.group(1)
        # undo step 1 so the href is escaped exactly once, markup included
        url = html.unescape(match.group(2)).strip()
        if not is_safe_url(url):
            return label
        return f'<a href="{escape_html(url)}" target="_blank" rel="noopener noreferrer">{label}</a>'

    return LINK_RE.sub(link, out)


class _Fragment:
    def __init__(self) -> None:
        self.parts: list[str] = []
        self.state = ListState.CLOSED

    def open_list(self) -> None:
        if self.state is ListState.CLOSED:
            self.parts.append("<ul>")
            self.state = ListState.OPEN

    def close_list(self) -> None:
        if self.state is ListState.OPEN:
            self.parts.append("</ul>")
            self.state = ListState.CLOSED

    def element(self, tag: str, text: str) -> None:
        self.parts.append(f"<{tag}>{inline(text)}</{tag}>")

    def html(self) -> str:
        self.close_list()
        return "".join(self.parts)


def classify(line: str) -> tuple[str, str]:
    if not line.strip():
        return "blank", ""
    for pattern, tag in HEADING_RES:
        if pattern.match(line):
            return tag, pattern.sub("", line, count=1)
    if LIST_ITEM_RE.match(line):
        return "li", LIST_MARKER_RE.sub("", line, count=1)
    return "p", line


def md_to_safe_html(text: str) -> str:
    normalized = str(text).replace("\r\n", "\n").replace("\r", "\n")
    fragment = _Fragment()
    for raw in normalized.split("\n"):
        kind, content = classify(raw.rstrip())
        if kind == "blank":
            fragment.close_list()
        elif kind == "li":
            fragment.open_list()
            fragment.element("li", content)
        else:
            fragment.close_list()
            fragment.element(kind, content)
    return fragment.html()
