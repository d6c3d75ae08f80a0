"""Serialization of declarative meta-tag descriptors into HTML markup.

The CMS describes SEO and favicon tags as structures like::

    [{"tag": "meta", "attributes": {"name": "description", "content": "foobar"}}]

which :func:`to_html` turns into ``<meta name="description" content="foobar"/>``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .models import MetaTag

TagLike = Union[MetaTag, Mapping[str, Any]]


class _InsertionOrderFormatter(HTMLFormatter):
    """Minimal-escaping formatter that keeps attributes in insertion order
    and always quotes values with double quotes."""

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

    def attribute_value(self, value):
        # Values are always wrapped in double quotes.
        return self.substitute(value).replace('"', "&quot;")


_FORMATTER = _InsertionOrderFormatter(entity_substitution=EntitySubstitution.substitute_xml)


def as_meta_tag(value: TagLike) -> MetaTag:
    """Accept either a :class:`MetaTag` or the API's ``{tag, attributes, content}`` mapping."""
    if isinstance(value, MetaTag):
        return value
    tag_name = value.get("tag") or value.get("tagName")
    if not tag_name:
        raise ValueError(f"Meta tag descriptor without a tag name: {value!r}")
    attributes = dict(value.get("attributes") or {})
    return MetaTag(tag_name=tag_name, attributes=attributes, content=value.get("content"))


def render_tag(tag: TagLike, soup: Optional[BeautifulSoup] = None) -> str:
    """Render a single descriptor as an HTML element."""
    tag = as_meta_tag(tag)
    if soup is None:
        soup = BeautifulSoup("", "html.parser", multi_valued_attributes=None)
    attrs = {
        str(key): (None if value is None else str(value))
        for key, value in tag.attributes.items()
    }
    element = soup.new_tag(tag.tag_name, attrs=attrs)
    if tag.content is not None and not element.can_be_empty_element:
        element.string = str(tag.content)
    else:
        # Void elements and content-less tags both close themselves.
        element.can_be_empty_element = True
    return element.decode(formatter=_FORMATTER)


def to_html(tags: Optional[Iterable[TagLike]]) -> str:
    """Concatenate the markup of every descriptor, in order, without separators."""
    if not tags:
        return ""
    soup = BeautifulSoup("", "html.parser", multi_valued_attributes=None)
    return "".join(render_tag(tag, soup) for tag in tags)
