from __future__ import annotations

import json
import sys
from pathlib import Path

from .utils import is_safe_segment

FRONT_MATTER_DELIMITER = "---"
DEFAULT_CATEGORY = "post"
POST_FIELDS = ("title", "date", "category", "summary")


def parse_list(value: str) -> list[str]:
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        items = [item.strip().strip("'\"") for item in inner.split(",")]
    else:
        items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    if not clean_text.startswith(FRONT_MATTER_DELIMITER):
        return {}, clean_text.strip()

    lines = clean_text.split("\n")
    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == FRONT_MATTER_DELIMITER:
            end = i
            break
    if end is None:
        return {}, clean_text.strip()

    # the opening line may carry text after the delimiter, e.g. "---title: x"
    header = [lines[0][len(FRONT_MATTER_DELIMITER) :]] + lines[1:end]
    meta = {}
    for line in header:
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if not key:
            continue
        meta[key] = value.strip()
    body = "\n".join(lines[end + 1 :]).strip()
    return meta, body


def load_manifest(path: Path) -> list[dict]:
    if not path.exists():
        print(f"{path.parent.name}/{path.name} not found", file=sys.stderr)
        sys.exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in manifest {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    posts = data.get("posts") if isinstance(data, dict) else None
    if not isinstance(posts, list):
        return []
    return [entry for entry in posts if isinstance(entry, dict) and entry.get("slug")]


def select_entries(entries: list[dict]) -> list[dict]:
    selected = []
    seen = set()
    for entry in entries:
        slug = str(entry["slug"])
        if not is_safe_segment(slug):
            print(f"Unsafe slug skipped: {slug!r}", file=sys.stderr)
            continue
        if slug in seen:
            print(f"Duplicate slug skipped: {slug}", file=sys.stderr)
            continue
        seen.add(slug)
        selected.append(entry)
    return selected


def resolve_tags(entry: dict, meta: dict) -> list[str]:
    tags = entry.get("tags")
    if isinstance(tags, list):
        return [str(tag) for tag in tags]
    if meta.get("tags"):
        return parse_list(str(meta["tags"]))
    return []


def resolve_post(entry: dict, meta: dict) -> dict:
    slug = str(entry["slug"])
    post = {"slug": slug}
    for field in POST_FIELDS:
        value = entry.get(field) or meta.get(field) or ""
        post[field] = str(value)
    post["title"] = post["title"] or slug
    post["category"] = post["category"] or DEFAULT_CATEGORY
    post["tags"] = resolve_tags(entry, meta)
    return post
