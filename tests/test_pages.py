"""Tests for page assembly and the sitemap."""

from __future__ import annotations

import json
import re

from postgen.config import SiteConfig
from postgen.pages import (
    build_head_block,
    build_post_page,
    build_sitemap,
    build_structured_data,
    canonical_url,
)

CONFIG = SiteConfig(site_url="https://example.com/blog/", site_name="Example", owner="Ann Owner")
LD_JSON_RE = re.compile(r'<script type="application/ld\+json">(.*?)</script>', re.S)


def _post(**overrides) -> dict:
    post = {
        "slug": "hello",
        "title": "Hello",
        "date": "2024-05-01",
        "category": "news",
        "summary": "A short summary.",
        "tags": ["a", "b"],
    }
    post.update(overrides)
    return post


def test_canonical_url() -> None:
    assert canonical_url("hello", CONFIG) == "https://example.com/blog/p/hello/"
    assert canonical_url("my post", CONFIG) == "https://example.com/blog/p/my%20post/"
    assert canonical_url("it's(ok)", CONFIG) == "https://example.com/blog/p/it's(ok)/"


def test_head_block() -> None:
    head = build_head_block(_post(), CONFIG)
    assert '<div class="kicker">news • 2024-05-01</div>' in head
    assert ">Hello</h1>" in head
    assert '<p class="muted">A short summary.</p>' in head
    assert head.count('class="tag"') == 2


def test_head_block_omits_empty_optional_parts() -> None:
    head = build_head_block(_post(date="", summary="", tags=[]), CONFIG)
    assert '<div class="kicker">news</div>' in head
    assert "muted" not in head
    assert "tags" not in head


def test_tags_are_truncated_to_ten() -> None:
    head = build_head_block(_post(tags=[f"t{i}" for i in range(12)]), CONFIG)
    assert head.count('class="tag"') == 10
    assert "t9<" in head
    assert "t10" not in head


def test_structured_data() -> None:
    data = build_structured_data(_post(), "https://example.com/blog/p/hello/", CONFIG)
    assert data["@type"] == "Article"
    assert data["headline"] == "Hello"
    assert data["datePublished"] == "2024-05-01"
    assert data["author"] == {"@type": "Person", "name": "Ann Owner"}
    assert data["publisher"] == {"@type": "Organization", "name": "Ann Owner"}
    assert data["url"] == data["mainEntityOfPage"] == "https://example.com/blog/p/hello/"


def test_structured_data_without_date() -> None:
    data = build_structured_data(_post(date=""), "u", CONFIG)
    assert "datePublished" not in data


def test_post_page() -> None:
    page = build_post_page(_post(), "<p>body</p>", CONFIG, year=2024)
    assert "<title>Hello | Example</title>" in page
    assert '<meta name="description" content="A short summary."/>' in page
    assert '<link rel="canonical" href="https://example.com/blog/p/hello/"/>' in page
    assert '<meta property="og:url" content="https://example.com/blog/p/hello/"/>' in page
    assert '<link rel="stylesheet" href="https://example.com/blog/styles.css"/>' in page
    assert '<div class="postBody"><p>body</p></div>' in page
    assert "&copy; 2024 Ann Owner" in page
    assert "{{" not in page
    data = json.loads(LD_JSON_RE.search(page).group(1))
    assert data["headline"] == "Hello"


def test_post_page_default_description() -> None:
    page = build_post_page(_post(summary=""), "", CONFIG, year=2024)
    assert '<meta name="description" content="Post on Example"/>' in page


def test_post_page_escapes_user_values() -> None:
    hostile = "</script><script>alert('x')</script>"
    post = _post(title=hostile, summary='"><img src=x>', category="<b>", date="<i>", tags=["<t>"])
    page = build_post_page(post, "", CONFIG, year=2024)
    assert "<script>alert" not in page
    assert "<img" not in page
    assert "<b>" not in page
    assert "<t>" not in page
    assert page.count("</script>") == 1
    data = json.loads(LD_JSON_RE.search(page).group(1))
    assert data["headline"] == hostile


def test_placeholders_in_user_values_are_not_expanded() -> None:
    page = build_post_page(_post(title="{{content}}"), "<p>body</p>", CONFIG, year=2024)
    assert page.count('<div class="postBody">') == 1
    assert "<title>{{content}} | Example</title>" in page


def test_sitemap_lists_root_then_posts() -> None:
    urls = ["https://example.com/blog/p/a/", "https://example.com/blog/p/b/"]
    sitemap = build_sitemap(urls, CONFIG)
    assert sitemap.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    assert '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">' in sitemap
    assert sitemap.count("<url>") == 3
    locs = re.findall(r"<loc>(.*?)</loc>", sitemap)
    assert locs == ["https://example.com/blog/"] + urls
    assert sitemap.count("<changefreq>daily</changefreq>") == 1
    assert sitemap.count("<priority>1.0</priority>") == 1
    assert sitemap.count("<changefreq>weekly</changefreq>") == 2
    assert sitemap.count("<priority>0.7</priority>") == 2
    assert sitemap.endswith("</urlset>\n")


def test_sitemap_escapes_urls() -> None:
    sitemap = build_sitemap(["https://example.com/?a=1&b='2'"], CONFIG)
    assert "<loc>https://example.com/?a=1&amp;b=&#x27;2&#x27;</loc>" in sitemap


def test_empty_sitemap_still_has_root() -> None:
    assert build_sitemap([], CONFIG).count("<url>") == 1
