"""Data models used throughout the export pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

ImageParam = Union[str, int]


@dataclass(frozen=True)
class MetaTag:
    """Declarative description of one HTML element."""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    content: Optional[str] = None


@dataclass(frozen=True)
class ImageReference:
    """CMS asset handle that resolves to a transformed image URL."""

    base_url: str
    alt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def url(self, params: Optional[Mapping[str, ImageParam]] = None) -> str:
        """Return the asset URL with the transformation params as query string."""
        if not params:
            return self.base_url
        parts = urlsplit(self.base_url)
        query = dict(parse_qsl(parts.query, keep_blank_values=True))
        query.update({key: str(value) for key, value in params.items()})
        return urlunsplit(parts._replace(query=urlencode(query)))


@dataclass(frozen=True)
class SocialProfile:
    profile_type: Optional[str]
    url: Optional[str]


@dataclass
class SiteSettings:
    """Global site attributes plus the home singleton."""

    site_name: Optional[str]
    locales: List[str] = field(default_factory=list)
    favicon_meta_tags: List[MetaTag] = field(default_factory=list)
    intro_text: Optional[str] = None
    copyright: Optional[str] = None
    social_profiles: List[SocialProfile] = field(default_factory=list)
    seo_meta_tags: List[MetaTag] = field(default_factory=list)


@dataclass
class PageRecord:
    """Singleton page such as the about or donate page."""

    title: Optional[str]
    subtitle: Optional[str] = None
    photo: Optional[ImageReference] = None
    bio: Optional[str] = None
    seo_meta_tags: List[MetaTag] = field(default_factory=list)


@dataclass
class CollectionEntry:
    """One record of an ordered collection (services, works, posts)."""

    slug: str
    title: Optional[str] = None
    cover_image: Optional[ImageReference] = None
    excerpt: Optional[str] = None
    gallery: List[ImageReference] = field(default_factory=list)
    description: Optional[str] = None
    seo_meta_tags: List[MetaTag] = field(default_factory=list)


@dataclass
class ContentSnapshot:
    """Everything read from the CMS for a single export run."""

    site: SiteSettings
    locale: str
    pages: Dict[str, PageRecord] = field(default_factory=dict)
    collections: Dict[str, List[CollectionEntry]] = field(default_factory=dict)
