# droidstrings/processors/strings_xml.py
"""
Reader and writer for Android strings.xml resource files.

Reading uses xml.etree.ElementTree. Writing is done by hand because element
content has already been through the escaping pass and must not be escaped a
second time by a generic serializer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence
from xml.etree import ElementTree as ET
from xml.sax.saxutils import quoteattr

from droidstrings.models.types import ExistingEntry, MergedEntry
from droidstrings.services.escaping import strip_invalid_xml_chars

logger = logging.getLogger(__name__)

ROOT_TAG = "resources"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Prefixes used when writing namespaced tags and attributes back
_KNOWN_PREFIXES = {
    "http://schemas.android.com/tools": "tools",
    "urn:oasis:names:tc:xliff:document:1.2": "xliff",
}


def read_existing_entries(path: Path) -> tuple[list[ExistingEntry], bool]:
    """
    Parse a strings.xml file into entries, in document order.

    A file that is not well-formed XML is treated as an empty document so one
    broken locale does not stop the others. Child elements (string-array and
    plurals items, inline markup) are kept on the entry.

    Args:
        path: strings.xml to read

    Returns:
        (entries, recovered) where recovered is True when a non-empty file
        could not be parsed

    Raises:
        OSError: the file cannot be read
    """
    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        if path.stat().st_size:
            logger.warning("Malformed resource file, starting from an empty document: %s (%s)", path, e)
            return [], True
        logger.debug("Empty resource file: %s", path)
        return [], False

    root = tree.getroot()
    if root.tag != ROOT_TAG:
        logger.warning("Unexpected root element <%s> in %s, it will be written as <%s>",
                       root.tag, path, ROOT_TAG)

    entries = []
    for element in root:
        name = element.get("name")
        if name is None or not name.strip():
            logger.warning("Skipping <%s> without a name attribute in %s", element.tag, path)
            continue
        attributes = tuple(
            (key, value) for key, value in element.attrib.items() if key != "name"
        )
        entries.append(ExistingEntry(
            key=name.strip(),
            text=element.text or "",
            tag=element.tag,
            attributes=attributes,
            children=tuple(element),
        ))

    logger.debug("Read %d entries from %s", len(entries), path)
    return entries, False


def _names(entry: MergedEntry) -> Iterator[str]:
    """Tag and attribute names of an entry and all of its descendants."""
    yield entry.tag
    yield from (key for key, _ in entry.attributes)
    for child in entry.children:
        for node in child.iter():
            yield node.tag
            yield from node.attrib


def _namespace_prefixes(entries: list[MergedEntry]) -> dict[str, str]:
    """Collect namespace URIs used in ElementTree's {uri}local names."""
    prefixes: dict[str, str] = {}
    for entry in entries:
        for name in _names(entry):
            if name.startswith("{"):
                uri = name[1:].split("}", 1)[0]
                if uri not in prefixes:
                    prefixes[uri] = _KNOWN_PREFIXES.get(uri, f"ns{len(prefixes)}")
    return prefixes


def _qualify(name: str, prefixes: dict[str, str]) -> str:
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    return f"{prefixes[uri]}:{local}"


def _attribute(name: str, value: str, prefixes: dict[str, str]) -> str:
    return f"{_qualify(name, prefixes)}={quoteattr(strip_invalid_xml_chars(value))}"


def _render_children(children: Sequence[ET.Element], prefixes: dict[str, str]) -> str:
    # Text and tails are already escaped
    parts = []
    for child in children:
        tag = _qualify(child.tag, prefixes)
        start = " ".join(
            [tag, *(_attribute(key, value, prefixes) for key, value in child.attrib.items())]
        )
        if child.text or len(child):
            inner = (child.text or "") + _render_children(list(child), prefixes)
            parts.append(f"<{start}>{inner}</{tag}>")
        else:
            parts.append(f"<{start}/>")
        parts.append(child.tail or "")
    return "".join(parts)


def _render_element(entry: MergedEntry, prefixes: dict[str, str]) -> str:
    tag = _qualify(entry.tag, prefixes)
    attributes = [_attribute("name", entry.key, prefixes)]
    attributes.extend(_attribute(key, value, prefixes) for key, value in entry.attributes)
    body = entry.content + _render_children(entry.children, prefixes)
    return f"<{tag} {' '.join(attributes)}>{body}</{tag}>"


def render_resources(entries: Iterable[MergedEntry], indent: int = 4) -> str:
    """Render entries as a strings.xml document. Content is written raw."""
    entries = list(entries)
    prefixes = _namespace_prefixes(entries)
    declarations = "".join(
        f" xmlns:{prefix}={quoteattr(uri)}" for uri, prefix in prefixes.items()
    )

    indentation = " " * indent
    lines = [XML_DECLARATION, f"<{ROOT_TAG}{declarations}>"]
    lines.extend(indentation + _render_element(entry, prefixes) for entry in entries)
    lines.append(f"</{ROOT_TAG}>")
    return "\n".join(lines) + "\n"


def write_resources(path: Path, entries: Iterable[MergedEntry], indent: int = 4) -> None:
    """
    Write entries to a strings.xml file (UTF-8, ``\\n`` line endings).

    The file is rewritten completely.

    Raises:
        OSError: the file cannot be written
    """
    document = render_resources(entries, indent=indent)
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(document)
    logger.debug("Wrote %s", path)
