from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional

from .config import SiteConfig
from .render import escape_html, json_script, read_template, render_template
from .utils import encode_component, join_url

TEMPLATE_PATH = Path(__file__).parent / "templates" / "post.html"
DIVIDER = '<hr style="border:0;border-top:1px solid rgba(255,255,255,.10);margin:14px 0;">'


def canonical_url(slug: str, config: SiteConfig) -> str:
    return join_url(config.site_url, f"p/{encode_component(slug)}/")


def build_tag_list(tags: list[str], limit: int) -> str:
    if not tags or limit <= 0:
        return ""
    items = "".join(f'<span class="tag">{escape_html(tag)}</span>' for tag in tags[:limit])
    return f'<div class="tags" style="margin-top:10px;">{items}</div>'


def build_head_block(post: dict, config: SiteConfig) -> str:
    kicker = escape_html(post["category"])
    if post["date"]:
        kicker += f" • {escape_html(post['date'])}"
    parts = [
        f'<div class="kicker">{kicker}</div>',
        f'<h1 class="h2" style="margin-top:8px;">{escape_html(post["title"])}</h1>',
    ]
    if post["summary"]:
        parts.append(f'<p class="muted">{escape_html(post["summary"])}</p>')
    tags_html = build_tag_list(post["tags"], config.tag_limit)
    if tags_html:
        parts.append(tags_html)
    parts.append(DIVIDER)
    return "\n".join(parts)


def build_structured_data(post: dict, canonical: str, config: SiteConfig) -> dict:
    data = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": post["title"],
    }
    if post["date"]:
        data["datePublished"] = post["date"]
    data.update(
        {
            "author": {"@type": "Person", "name": config.owner},
            "publisher": {"@type": "Organization", "name": config.owner},
            "mainEntityOfPage": canonical,
            "url": canonical,
        }
    )
    return data


def build_post_page(
    post: dict,
    fragment: str,
    config: SiteConfig,
    template: Optional[str] = None,
    year: Optional[int] = None,
) -> str:
    if template is None:
        template = read_template(TEMPLATE_PATH)
    if year is None:
        year = dt.datetime.now().year
    canonical = canonical_url(post["slug"], config)
    description = post["summary"] or f"Post on {config.site_name}"
    content = build_head_block(post, config) + f'<div class="postBody">{fragment}</div>'
    return render_template(
        template,
        lang=escape_html(config.lang),
        theme_color=escape_html(config.theme_color),
        title=escape_html(f"{post['title']} | {config.site_name}"),
        description=escape_html(description),
        owner=escape_html(config.owner),
        canonical=escape_html(canonical),
        structured_data=json_script(build_structured_data(post, canonical, config)),
        stylesheet=escape_html(config.stylesheet),
        home_url=escape_html(config.home_url),
        site_name=escape_html(config.site_name),
        tagline=escape_html(config.tagline),
        year=str(year),
        content=content,
    )


def build_sitemap(urls: list[str], config: SiteConfig) -> str:
    entries = [(config.home_url, "daily", "1.0")]
    entries.extend((url, "weekly", "0.7") for url in urls)
    items = []
    for loc, changefreq, priority in entries:
        items.append(
            "\n".join(
                [
                    "  <url>",
                    f"    <loc>{escape_html(loc)}</loc>",
                    f"    <changefreq>{changefreq}</changefreq>",
                    f"    <priority>{priority}</priority>",
                    "  </url>",
                ]
            )
        )
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
            "\n".join(items),
            "</urlset>",
            "",
        ]
    )
