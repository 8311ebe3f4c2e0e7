from __future__ import annotations

import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

import yaml

from .utils import join_url, parse_int

DEFAULT_SITE_URL = "https://antonovvladimirchebara-debug.github.io/1"
DEFAULT_SITE_NAME = "1 Million Dollars"
DEFAULT_OWNER = "Vladimir Antonov"
DEFAULT_TAGLINE = "News • Forecasts • Reviews • Notes"
DEFAULT_THEME_COLOR = "#0b1020"
TAG_LIMIT = 10


@dataclass(frozen=True)
class SiteConfig:
    site_url: str = DEFAULT_SITE_URL
    site_name: str = DEFAULT_SITE_NAME
    owner: str = DEFAULT_OWNER
    tagline: str = DEFAULT_TAGLINE
    stylesheet: str = ""
    lang: str = "en"
    theme_color: str = DEFAULT_THEME_COLOR
    tag_limit: int = TAG_LIMIT
    posts_dir: Path = Path("posts")
    output_dir: Path = Path("p")
    sitemap_path: Path = Path("sitemap.xml")

    def __post_init__(self) -> None:
        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, "site_url", self.site_url.strip().rstrip("/"))
        if not self.stylesheet:
            object.__setattr__(self, "stylesheet", join_url(self.site_url, "styles.css"))

    @property
    def home_url(self) -> str:
        return f"{self.site_url}/"

    @classmethod
    def from_args(cls, args: object, root: Path) -> "SiteConfig":
        def resolve(value: str) -> Path:
            path = Path(value)
            return path if path.is_absolute() else root / path

        return cls(
            site_url=str(getattr(args, "site_url", "") or DEFAULT_SITE_URL),
            site_name=str(getattr(args, "site_name", "") or DEFAULT_SITE_NAME),
            owner=str(getattr(args, "owner", "") or DEFAULT_OWNER),
            tagline=str(getattr(args, "tagline", DEFAULT_TAGLINE) or ""),
            stylesheet=str(getattr(args, "stylesheet", "") or ""),
            lang=str(getattr(args, "lang", "") or "en"),
            theme_color=str(getattr(args, "theme_color", "") or DEFAULT_THEME_COLOR),
            tag_limit=max(0, parse_int(getattr(args, "tag_limit", TAG_LIMIT), TAG_LIMIT)),
            posts_dir=resolve(getattr(args, "posts", "") or "posts"),
            output_dir=resolve(getattr(args, "output", "") or "p"),
            sitemap_path=resolve(getattr(args, "sitemap", "") or "sitemap.xml"),
        )


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data
