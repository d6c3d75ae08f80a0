"""Image variant parameters and URL resolution."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .models import ImageParam, ImageReference

IMAGE_VARIANTS: Dict[str, Dict[str, ImageParam]] = {
    "photo": {"w": 800, "fm": "jpg", "auto": "compress"},
    "cover": {"w": 450, "fm": "jpg", "auto": "compress"},
    "full": {"fm": "jpg", "auto": "compress"},
    "detail": {"w": 600, "fm": "jpg", "auto": "compress"},
    "gallery": {"h": 300, "fm": "jpg", "auto": "compress"},
}


def image_url(ref: Optional[ImageReference], variant: str) -> Optional[str]:
    """Resolve an image reference using the named variant's parameters."""
    params = IMAGE_VARIANTS[variant]
    if ref is None:
        return None
    return ref.url(params)


def gallery_urls(refs: Optional[Iterable[Optional[ImageReference]]], variant: str = "gallery") -> List[str]:
    """Resolve every gallery item in order, skipping empty slots."""
    urls: List[str] = []
    for ref in refs or []:
        url = image_url(ref, variant)
        if url is not None:
            urls.append(url)
    return urls
