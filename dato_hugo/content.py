"""GraphQL queries and conversion of API payloads into content records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .client import DatoClient
from .config import DEFAULT_COLLECTIONS, DEFAULT_PAGE_SIZE
from .models import (
    CollectionEntry,
    ContentSnapshot,
    ImageReference,
    MetaTag,
    PageRecord,
    SiteSettings,
    SocialProfile,
)
from .tags import as_meta_tag

logger = logging.getLogger("dato_hugo")


@dataclass(frozen=True)
class PageSpec:
    """Where a singleton page lives in the CMS and in the Hugo tree."""

    name: str
    field: str
    path: str
    weight: int


_FRAGMENTS = """
fragment seoTags on Tag { tag attributes content }
fragment asset on FileField { url alt width height }
"""

_PAGE_FIELDS = "title subtitle bio photo { ...asset } _seoMetaTags { ...seoTags }"

_ENTRY_FIELDS = (
    "slug title excerpt description coverImage { ...asset } "
    "gallery { ...asset } _seoMetaTags { ...seoTags }"
)


@dataclass(frozen=True)
class CollectionSpec:
    """Where an ordered collection lives in the CMS and in the Hugo tree.

    ``order_by`` is only valid on sortable models; ``None`` keeps the API's
    default order.
    """

    name: str
    field: str
    directory: Optional[str] = None
    order_by: Optional[str] = "position_ASC"
    fields: str = _ENTRY_FIELDS


PAGES: Dict[str, PageSpec] = {
    spec.name: spec
    for spec in (
        PageSpec("about", "aboutPage", "content/about.md", 100),
        PageSpec("donate", "donatePage", "content/donate.md", 100),
        PageSpec("newsletter", "newsletterPage", "content/newsletter.md", 100),
        PageSpec("contact", "contactPage", "content/contact.md", 101),
    )
}

COLLECTIONS: Dict[str, CollectionSpec] = {
    spec.name: spec
    for spec in (
        CollectionSpec("services", "allServices", "content/services"),
        CollectionSpec("works", "allWorks", "content/works"),
        CollectionSpec("posts", "allPosts", "content/posts", order_by=None),
    )
}


SOCIAL_PROFILES = CollectionSpec(
    "socialProfiles", "allSocialProfiles", order_by=None, fields="profileType url"
)


def build_site_query(pages: Iterable[PageSpec] = PAGES.values()) -> str:
    """Query for the global settings, the home record and every singleton page."""
    page_lines = "\n".join(
        f"  {spec.name}: {spec.field}(locale: $locale) {{ {_PAGE_FIELDS} }}"
        for spec in pages
    )
    return (
        "query Site($locale: SiteLocale) {\n"
        "  _site(locale: $locale) { globalSeo { siteName } locales "
        "faviconMetaTags { ...seoTags } }\n"
        "  home(locale: $locale) { introText copyright _seoMetaTags { ...seoTags } }\n"
        f"{page_lines}\n"
        "}\n" + _FRAGMENTS
    )


def build_collection_query(spec: CollectionSpec) -> str:
    """Paged query for one collection, in CMS order."""
    arguments = "locale: $locale, first: $first, skip: $skip"
    if spec.order_by:
        arguments += f", orderBy: {spec.order_by}"
    query = (
        "query Collection($locale: SiteLocale, $first: IntType, $skip: IntType) {\n"
        f"  items: {spec.field}({arguments}) {{ {spec.fields} }}\n"
        "}\n"
    )
    # GraphQL rejects unused fragments.
    if "..." in spec.fields:
        query += _FRAGMENTS
    return query


def _image(value: Optional[Mapping[str, Any]]) -> Optional[ImageReference]:
    if not value or not value.get("url"):
        return None
    return ImageReference(
        base_url=value["url"],
        alt=value.get("alt"),
        width=value.get("width"),
        height=value.get("height"),
    )


def _tags(values: Optional[Iterable[Mapping[str, Any]]]) -> List[MetaTag]:
    return [as_meta_tag(value) for value in values or []]


def parse_page(data: Optional[Mapping[str, Any]]) -> PageRecord:
    data = data or {}
    return PageRecord(
        title=data.get("title"),
        subtitle=data.get("subtitle"),
        photo=_image(data.get("photo")),
        bio=data.get("bio"),
        seo_meta_tags=_tags(data.get("_seoMetaTags")),
    )


def parse_entry(data: Mapping[str, Any]) -> CollectionEntry:
    gallery = [_image(item) for item in data.get("gallery") or []]
    return CollectionEntry(
        slug=data.get("slug"),
        title=data.get("title"),
        cover_image=_image(data.get("coverImage")),
        excerpt=data.get("excerpt"),
        gallery=[ref for ref in gallery if ref is not None],
        description=data.get("description"),
        seo_meta_tags=_tags(data.get("_seoMetaTags")),
    )


def parse_social_profiles(items: Optional[Iterable[Mapping[str, Any]]]) -> List[SocialProfile]:
    return [
        SocialProfile(profile_type=item.get("profileType"), url=item.get("url"))
        for item in items or []
    ]


def parse_site(data: Mapping[str, Any]) -> SiteSettings:
    site = data.get("_site") or {}
    home = data.get("home") or {}
    global_seo = site.get("globalSeo") or {}
    return SiteSettings(
        site_name=global_seo.get("siteName"),
        locales=list(site.get("locales") or []),
        favicon_meta_tags=_tags(site.get("faviconMetaTags")),
        intro_text=home.get("introText"),
        copyright=home.get("copyright"),
        social_profiles=parse_social_profiles(data.get("allSocialProfiles")),
        seo_meta_tags=_tags(home.get("_seoMetaTags")),
    )


def build_snapshot(
    data: Mapping[str, Any],
    collections: Optional[Mapping[str, Sequence[Mapping[str, Any]]]] = None,
    locale: Optional[str] = None,
    pages: Iterable[str] = PAGES,
) -> ContentSnapshot:
    """Convert raw API payloads into a :class:`ContentSnapshot`.

    ``locale`` defaults to the first locale configured on the site.
    """
    site = parse_site(data)
    active_locale = locale or (site.locales[0] if site.locales else "")
    return ContentSnapshot(
        site=site,
        locale=active_locale,
        pages={name: parse_page(data.get(name)) for name in pages},
        collections={
            name: [parse_entry(item) for item in items]
            for name, items in (collections or {}).items()
        },
    )


def fetch_collection(
    client: DatoClient,
    spec: CollectionSpec,
    locale: Optional[str] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """Fetch every record of a collection, following ``first``/``skip`` paging."""
    query = build_collection_query(spec)
    items: List[Dict[str, Any]] = []
    skip = 0
    while True:
        variables: Dict[str, Any] = {"first": page_size, "skip": skip}
        if locale:
            variables["locale"] = locale
        batch = client.query(query, variables).get("items") or []
        items.extend(batch)
        logger.debug("Fetched %d %s record(s) (skip=%d)", len(batch), spec.name, skip)
        if len(batch) < page_size:
            break
        skip += page_size
    return items


def fetch_snapshot(
    client: DatoClient,
    locale: Optional[str] = None,
    collections: Iterable[str] = DEFAULT_COLLECTIONS,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ContentSnapshot:
    """Read the whole content graph needed for one export run."""
    specs = [COLLECTIONS[name] for name in collections]
    variables = {"locale": locale} if locale else None
    logger.info("Fetching site settings and pages")
    data = client.query(build_site_query(), variables)
    snapshot = build_snapshot(data, locale=locale)
    active_locale = snapshot.locale or None

    logger.info("Fetching social profiles")
    snapshot.site.social_profiles = parse_social_profiles(
        fetch_collection(client, SOCIAL_PROFILES, locale=active_locale, page_size=page_size)
    )

    raw_collections: Dict[str, List[Dict[str, Any]]] = {}
    for spec in specs:
        logger.info("Fetching collection %s", spec.name)
        raw_collections[spec.name] = fetch_collection(
            client, spec, locale=active_locale, page_size=page_size
        )
    snapshot.collections = {
        name: [parse_entry(item) for item in items]
        for name, items in raw_collections.items()
    }
    return snapshot
