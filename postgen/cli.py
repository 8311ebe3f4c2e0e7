from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .config import (
    DEFAULT_OWNER,
    DEFAULT_SITE_NAME,
    DEFAULT_SITE_URL,
    DEFAULT_TAGLINE,
    DEFAULT_THEME_COLOR,
    TAG_LIMIT,
    SiteConfig,
    load_config,
)
from .content import load_manifest, parse_front_matter, resolve_post, select_entries
from .markup import md_to_safe_html
from .pages import TEMPLATE_PATH, build_post_page, build_sitemap, canonical_url
from .render import read_template, write_text
from .utils import parse_int


def build_site(config: SiteConfig) -> tuple[list[str], list[str]]:
    posts_dir = config.posts_dir
    output_dir = config.output_dir
    entries = load_manifest(posts_dir / "index.json")

    output_dir.mkdir(parents=True, exist_ok=True)
    template = read_template(TEMPLATE_PATH)

    post_urls = []
    skipped = []
    for entry in select_entries(entries):
        slug = str(entry["slug"])
        md_path = posts_dir / f"{slug}.md"
        if not md_path.exists():
            print(f"Missing md: {md_path}", file=sys.stderr)
            skipped.append(slug)
            continue

        meta, body = parse_front_matter(md_path.read_text(encoding="utf-8"))
        post = resolve_post(entry, meta)
        html_doc = build_post_page(post, md_to_safe_html(body), config, template=template)
        write_text(output_dir / slug / "index.html", html_doc)
        post_urls.append(canonical_url(slug, config))

    write_text(config.sitemap_path, build_sitemap(post_urls, config))
    return post_urls, skipped


def main() -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args()
    config = load_config(Path(pre_args.config))

    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    def cfg_int(key: str, default: int) -> int:
        return parse_int(config.get(key), default)

    parser = argparse.ArgumentParser(description="Build post pages and sitemap.xml from Markdown posts.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--posts",
        default=cfg_str("posts", "posts"),
        help="Directory containing index.json and <slug>.md sources.",
    )
    parser.add_argument("--output", default=cfg_str("output", "p"), help="Output directory for post pages.")
    parser.add_argument("--sitemap", default=cfg_str("sitemap", "sitemap.xml"), help="Path of the sitemap file.")
    parser.add_argument("--site-url", default=cfg_str("site_url", DEFAULT_SITE_URL), help="Public site URL.")
    parser.add_argument("--site-name", default=cfg_str("site_name", DEFAULT_SITE_NAME), help="Site title.")
    parser.add_argument("--owner", default=cfg_str("owner", DEFAULT_OWNER), help="Author and publisher name.")
    parser.add_argument("--tagline", default=cfg_str("tagline", DEFAULT_TAGLINE), help="Text under the site title.")
    parser.add_argument(
        "--stylesheet",
        default=cfg_str("stylesheet", ""),
        help="Stylesheet URL (defaults to <site-url>/styles.css).",
    )
    parser.add_argument("--lang", default=cfg_str("lang", "en"), help="Document language.")
    parser.add_argument("--theme-color", default=cfg_str("theme_color", DEFAULT_THEME_COLOR), help="Theme colour.")
    parser.add_argument(
        "--tag-limit",
        default=cfg_int("tag_limit", TAG_LIMIT),
        type=int,
        help="Maximum number of tags shown on a post.",
    )
    args = parser.parse_args()
    site_config = SiteConfig.from_args(args, Path.cwd())

    start = time.perf_counter()
    post_urls, skipped = build_site(site_config)
    elapsed = time.perf_counter() - start
    summary = f"Generated {len(post_urls)} pages and {site_config.sitemap_path.name}"
    if skipped:
        summary += f" ({len(skipped)} skipped)"
    print(summary)
    print(f"Build completed in {elapsed:.2f}s.")
