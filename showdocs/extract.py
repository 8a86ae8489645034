"""Extraction of description data from javadoc-generated pages.

Two page shapes are understood:

* API pages (type pages, ``package-summary.html`` and ``module-summary.html``)
  yield an :class:`~showdocs.models.APIDescription`.
* ``serialized-form.html`` yields one
  :class:`~showdocs.models.SerializedFormBundle` per serializable type.

Both the current javadoc layout (``sub-title``, ``section.detail``) and the
older camelCase layout (``subTitle``, ``<a id=...>`` member anchors) are
recognised for API pages.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from .models import APIDescription, SerializedFormBundle

_SUB_TITLE_CLASSES = {"sub-title", "subTitle"}
_DESCRIPTION_CLASSES = {
    "class-description",
    "package-description",
    "module-description",
    "description",
}
_SERIALIZED_CLASS_CLASSES = {"serialized-class-details", "serializedClassDetails"}

_OVERVIEW_HEADING = "Serialization Overview"
_FIELDS_HEADING = "Serialized Fields"
_METHODS_HEADING = "Serialization Methods"

_HEADING_TAGS = ["h2", "h3", "h4", "h5", "h6"]
_SECTION_ANCHOR = re.compile(r"[.-]detail$|[.-]summary$")
_USES_PREFIX = "Uses of "


class ExtractionError(RuntimeError):
    """Raised when a page cannot be read or holds no recognisable declaration."""


def read_api_description(path: Path) -> APIDescription:
    """Return the declaration names and descriptions found on an API page."""
    soup = _load(path)

    names = _declaration_names(soup)
    if names is None:
        raise ExtractionError(f"No declaration found in {path}")

    return APIDescription(
        declaration_names=names,
        description=_main_description(soup),
        member_descriptions=_member_descriptions(soup),
    )


def read_serialized_form_bundles(path: Path) -> Dict[str, SerializedFormBundle]:
    """Return serialized-form bundles keyed by fully-qualified type name, in page order."""
    soup = _load(path)

    bundles: Dict[str, SerializedFormBundle] = {}
    for element in soup.find_all(_has_class(_SERIALIZED_CLASS_CLASSES)):
        type_name = element.get("id")
        if not type_name:
            continue
        bundles[type_name] = _read_bundle(element)
    return bundles


# ----------------------------------------------------------------------
# Page loading


def _load(path: Path) -> BeautifulSoup:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Cannot read {path}: {exc}") from exc
    try:
        return BeautifulSoup(text, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ExtractionError(f"Cannot parse {path}: {exc}") from exc


def _has_class(classes: Iterable[str], *, tags: Iterable[str] | None = None):
    wanted = set(classes)
    names = set(tags) if tags is not None else None

    def _matches(tag: Tag) -> bool:
        if names is not None and tag.name not in names:
            return False
        return bool(wanted.intersection(tag.get("class") or ()))

    return _matches


def _text(tag: Tag) -> str:
    # javadoc separates labels from names with &nbsp; and type parameters with zero-width spaces
    return " ".join(tag.get_text().replace("\u200b", "").split())


def _block_markup(scope: Tag | None) -> Optional[str]:
    if scope is None:
        return None
    block = scope.find("div", class_="block")
    if block is None:
        return None
    return block.decode_contents().strip()


# ----------------------------------------------------------------------
# API pages


def _declaration_names(soup: BeautifulSoup) -> Optional[Dict[str, str]]:
    scope = soup.find("div", class_="header") or soup
    names: Dict[str, str] = {}
    for element in scope.find_all(_is_declaration_element):
        if element.name == "div":
            key, value = _sub_title_entry(element)
            if value and key not in names:
                names[key] = value
            continue
        key, value = _title_entry(element)
        if not value:
            return None
        if key not in names:
            names[key] = value
        return names
    return None


def _is_declaration_element(tag: Tag) -> bool:
    classes = tag.get("class") or ()
    if tag.name == "div":
        return bool(_SUB_TITLE_CLASSES.intersection(classes))
    return tag.name in ("h1", "h2") and "title" in classes


def _sub_title_entry(element: Tag) -> tuple[str, str]:
    label = element.find("span")
    link = element.find("a")
    if label is None:
        return "package", _text(element)
    key = _text(label).lower()
    if link is not None:
        return key, _text(link)
    value = _text(element)
    return key, value[len(_text(label)):].strip()


def _title_entry(heading: Tag) -> tuple[str, str]:
    title = heading.get("title") or _text(heading)
    title = title.split("<", 1)[0].strip()
    if title.startswith(_USES_PREFIX):
        # class-use pages list references to a type and declare nothing
        return "class", ""
    words = title.split()
    if not words:
        return "class", ""
    # "Class Foo", "Annotation Interface Foo", "Package p", "Module m"
    name = words[-1]
    if len(words) > 1 and words[0] == "Module":
        return "module", name
    if len(words) > 1 and words[0] == "Package":
        return "package", name
    return "class", name


def _main_description(soup: BeautifulSoup) -> Optional[str]:
    container = soup.find(_has_class(_DESCRIPTION_CLASSES, tags=("section", "div")))
    return _block_markup(container)


def _member_descriptions(soup: BeautifulSoup) -> Dict[str, str]:
    members: Dict[str, str] = {}
    details = soup.find_all("section", class_="detail")
    if details:
        for section in details:
            signature = section.get("id")
            description = _block_markup(section)
            if signature and description is not None:
                members.setdefault(signature, description)
        return members

    scope = soup.find("div", class_="details")
    if scope is None:
        return members
    for anchor in scope.find_all("a"):
        signature = anchor.get("id") or anchor.get("name")
        if not signature or _SECTION_ANCHOR.search(signature):
            continue
        description = _block_markup(anchor.find_next_sibling("ul"))
        if description is not None:
            members.setdefault(signature, description)
    return members


# ----------------------------------------------------------------------
# Serialized-form pages


def _read_bundle(element: Tag) -> SerializedFormBundle:
    bundle = SerializedFormBundle(serial_version_uid=_serial_version_uid(element))
    for heading in element.find_all(_HEADING_TAGS):
        title = _text(heading)
        container = heading.parent
        if container is None:
            continue
        if title == _OVERVIEW_HEADING:
            bundle.overview = _block_markup(container)
        elif title == _FIELDS_HEADING:
            for name_heading, scope in _entries(container, heading):
                description = _block_markup(scope)
                if description is not None:
                    bundle.field_descriptions.setdefault(_text(name_heading), description)
        elif title == _METHODS_HEADING:
            for name_heading, scope in _entries(container, heading):
                description = _block_markup(scope)
                if description is None:
                    continue
                signature = scope.get("id") or _text(name_heading)
                bundle.method_descriptions.setdefault(signature, description)
    return bundle


def _entries(container: Tag, heading: Tag) -> Iterable[tuple[Tag, Tag]]:
    level = _HEADING_TAGS.index(heading.name)
    if level + 1 >= len(_HEADING_TAGS):
        return []
    entry_tag = _HEADING_TAGS[level + 1]
    return [
        (name_heading, name_heading.parent)
        for name_heading in container.find_all(entry_tag)
        if name_heading.parent is not None
    ]


def _serial_version_uid(element: Tag) -> Optional[str]:
    for term in element.find_all("dt"):
        if _text(term).startswith("serialVersionUID"):
            value = term.find_next_sibling("dd")
            if value is not None:
                return value.decode_contents().strip()
    return None


__all__ = ["ExtractionError", "read_api_description", "read_serialized_form_bundles"]
