"""
Pytest fixtures shared by the dato-hugo tests
"""

from typing import Any, Dict, List, Optional

import pytest
import yaml

from dato_hugo.content import build_snapshot
from dato_hugo.files import SiteRoot


ASSET_HOST = "https://www.datocms-assets.com/1234"


def _tags(description: str) -> List[Dict[str, Any]]:
    return [
        {"tag": "title", "attributes": None, "content": description},
        {"tag": "meta", "attributes": {"name": "description", "content": description}, "content": None},
    ]


def _page(name: str, photo: bool = True) -> Dict[str, Any]:
    return {
        "title": f"{name.title()} title",
        "subtitle": f"{name.title()} subtitle",
        "bio": f"{name.title()} body text.",
        "photo": {"url": f"{ASSET_HOST}/{name}.png", "alt": None, "width": 1600, "height": 900}
        if photo
        else None,
        "_seoMetaTags": _tags(name),
    }


def _service(slug: str) -> Dict[str, Any]:
    return {
        "slug": slug,
        "title": slug.replace("-", " ").title(),
        "excerpt": f"About {slug}",
        "description": f"# {slug}\n\nLong description.",
        "coverImage": {"url": f"{ASSET_HOST}/{slug}-cover.jpg"},
        "gallery": [
            {"url": f"{ASSET_HOST}/{slug}-1.jpg"},
            {"url": f"{ASSET_HOST}/{slug}-2.jpg"},
        ],
        "_seoMetaTags": _tags(slug),
    }


@pytest.fixture
def site_payload() -> Dict[str, Any]:
    """Response body of the site query, shaped like the Content Delivery API."""
    return {
        "_site": {
            "globalSeo": {"siteName": "Harbor Collective"},
            "locales": ["en", "it"],
            "faviconMetaTags": [
                {"tag": "link", "attributes": {"rel": "icon", "sizes": "32x32", "href": f"{ASSET_HOST}/fav.png"}, "content": None},
            ],
        },
        "home": {
            "introText": "We build things.",
            "copyright": "2024 Harbor Collective",
            "_seoMetaTags": _tags("home"),
        },
        "allSocialProfiles": [
            {"profileType": "Media Partner", "url": "https://x.example"},
            {"profileType": "Twitter", "url": "https://twitter.example/harbor"},
        ],
        "about": _page("about"),
        "donate": _page("donate", photo=False),
        "newsletter": _page("newsletter"),
        "contact": _page("contact"),
    }


@pytest.fixture
def services_payload() -> List[Dict[str, Any]]:
    return [_service("web-design"), _service("branding"), _service("consulting")]


@pytest.fixture
def snapshot(site_payload, services_payload):
    return build_snapshot(site_payload, {"services": services_payload})


@pytest.fixture
def site_root(tmp_path) -> SiteRoot:
    return SiteRoot(tmp_path)


@pytest.fixture
def read_post():
    """Split a generated Markdown file into (frontmatter, body)."""

    def _read(path) -> "tuple[Dict[str, Any], Optional[str]]":
        text = path.read_text(encoding="utf-8")
        _, header, body = text.split("---\n", 2)
        return yaml.safe_load(header), body.strip() or None

    return _read
