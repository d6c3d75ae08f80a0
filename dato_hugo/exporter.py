"""Field mapping from CMS records to Hugo files, and the export driver."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .client import DatoClient
from .config import DEFAULT_HUGO_CONFIGS, ExportConfig
from .content import COLLECTIONS, PAGES, fetch_snapshot
from .files import SiteRoot
from .images import gallery_urls, image_url
from .models import CollectionEntry, ContentSnapshot, PageRecord
from .tags import to_html
from .utils import normalize_profile_type

logger = logging.getLogger("dato_hugo")


@dataclass
class ExportReport:
    """Outcome of a single export run."""

    written: List[Path] = field(default_factory=list)
    collection_counts: Dict[str, int] = field(default_factory=dict)
    total_seconds: float = 0.0


def hugo_config_patch(snapshot: ContentSnapshot) -> Dict[str, Any]:
    return {
        "title": snapshot.site.site_name,
        "languageCode": snapshot.locale,
    }


def settings_data(snapshot: ContentSnapshot) -> Dict[str, Any]:
    """Global data exposed to templates as ``.Site.Data.settings``."""
    site = snapshot.site
    return {
        "name": site.site_name,
        "language": site.locales[0] if site.locales else None,
        "intro": site.intro_text,
        "copyright": site.copyright,
        "socialProfiles": [
            {"type": normalize_profile_type(profile.profile_type), "url": profile.url}
            for profile in site.social_profiles
        ],
        "faviconMetaTags": to_html(site.favicon_meta_tags),
        "seoMetaTags": to_html(site.seo_meta_tags),
    }


def page_document(page: PageRecord, weight: int) -> Dict[str, Any]:
    frontmatter: Dict[str, Any] = {
        "title": page.title,
        "subtitle": page.subtitle,
    }
    photo = image_url(page.photo, "photo")
    if photo is not None:
        frontmatter["photo"] = photo
    frontmatter["seoMetaTags"] = to_html(page.seo_meta_tags)
    frontmatter["menu"] = {"main": {"weight": weight}}
    return {"frontmatter": frontmatter, "content": page.bio}


def collection_entry_document(entry: CollectionEntry, index: int) -> Dict[str, Any]:
    """Frontmatter and body for one collection entry; ``index`` is its weight."""
    frontmatter: Dict[str, Any] = {"title": entry.title}
    for key, variant in (("coverImage", "cover"), ("image", "full"), ("detailImage", "detail")):
        url = image_url(entry.cover_image, variant)
        if url is not None:
            frontmatter[key] = url
    frontmatter["excerpt"] = entry.excerpt
    frontmatter["seoMetaTags"] = to_html(entry.seo_meta_tags)
    frontmatter["extraImages"] = gallery_urls(entry.gallery)
    frontmatter["weight"] = index
    return {"frontmatter": frontmatter, "content": entry.description}


def collection_entry_path(entry: CollectionEntry) -> str:
    return f"{entry.slug}.md"


def export_collection(root: SiteRoot, directory: str, entries: List[CollectionEntry]) -> None:
    """Empty ``directory`` and write one Markdown file per entry."""
    with root.directory(directory) as target:
        for index, entry in enumerate(entries):
            target.create_post(
                collection_entry_path(entry), "yaml", collection_entry_document(entry, index)
            )
    logger.info("Wrote %d file(s) to %s", len(entries), directory)


def export_site(
    snapshot: ContentSnapshot,
    root: SiteRoot,
    hugo_configs: Iterable[str] = DEFAULT_HUGO_CONFIGS,
    collections: Optional[Iterable[str]] = None,
) -> ExportReport:
    """Write every Hugo file derived from ``snapshot`` below ``root``.

    ``collections`` defaults to every collection present in the snapshot.
    """
    start = time.perf_counter()
    first_written = len(root.written)
    report = ExportReport()

    for config_file in hugo_configs:
        root.add_to_data_file(config_file, "toml", hugo_config_patch(snapshot))
    logger.info("Updated Hugo config files")

    root.create_data_file("data/settings.yml", "yaml", settings_data(snapshot))
    logger.info("Wrote data/settings.yml")

    for name, page in snapshot.pages.items():
        spec = PAGES[name]
        root.create_post(spec.path, "yaml", page_document(page, spec.weight))
    logger.info("Wrote %d page(s)", len(snapshot.pages))

    names = list(snapshot.collections) if collections is None else list(collections)
    for name in names:
        spec = COLLECTIONS[name]
        entries = snapshot.collections.get(name, [])
        export_collection(root, spec.directory, entries)
        report.collection_counts[name] = len(entries)

    report.written = root.written[first_written:]
    report.total_seconds = time.perf_counter() - start
    return report


def run_export(config: ExportConfig) -> ExportReport:
    """Fetch a fresh snapshot from DatoCMS and export it into ``config.root``."""
    with DatoClient(
        config.api_token,
        api_url=config.api_url,
        environment=config.environment,
        include_drafts=config.include_drafts,
        timeout=config.timeout,
    ) as client:
        snapshot = fetch_snapshot(
            client,
            locale=config.locale,
            collections=config.collections,
            page_size=config.page_size,
        )
    return export_site(
        snapshot,
        SiteRoot(config.root),
        hugo_configs=config.hugo_configs,
        collections=config.collections,
    )
