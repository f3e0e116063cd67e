# droidstrings/services/escaping.py
"""
Escaping pass for Android string resource content.

The result is written into strings.xml as raw element content, so it must be
valid XML and valid for the Android resource compiler at the same time:

- Android rejects ``&apos;``, a single quote is written as ``\\'``
- ``&quot;`` is written back as a literal double quote
- ``@`` is always written as ``&#064;`` (a leading ``@`` is a resource reference)

Content written by a previous run is parsed back and escaped again on every
run, so the pass first undoes the backslash escapes it produces. Escaping the
parsed form of an escaped string gives the same string back.
"""

import re
from xml.sax.saxutils import escape

_XML_ENTITIES = {
    '"': "&quot;",
    "'": "&apos;",
}

# Characters an XML 1.0 parser rejects even as character references.
# Removed so the written file can be read back on the next run.
_INVALID_XML_CHARS = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def has_invalid_xml_chars(text: str) -> bool:
    """Check for characters that cannot appear anywhere in an XML 1.0 document."""
    return _INVALID_XML_CHARS.search(text) is not None


def strip_invalid_xml_chars(text: str) -> str:
    """Remove characters that cannot appear anywhere in an XML 1.0 document."""
    return _INVALID_XML_CHARS.sub("", text)


def escape_xml(text: str) -> str:
    """Escape ``& < > " '`` and drop characters XML cannot carry."""
    return escape(strip_invalid_xml_chars(text), _XML_ENTITIES)


def escape_fragment(text: str) -> str:
    """
    Escape one text node without trimming it.

    Used for the text around inline markup and inside <item> children, where
    surrounding whitespace belongs to the layout of the element.
    """
    # The parser reports \r\n and \r as \n, normalize before the first write
    result = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    result = result.replace("\\'", "'")
    result = result.replace("\\@", "@")
    result = escape_xml(result)
    result = result.replace("&apos;", "\\'")
    result = result.replace("&quot;", '"')
    result = result.replace("@", "&#064;")
    return result


def escape_content(text: str) -> str:
    """
    Escape text for use as the content of a <string> element.

    Args:
        text: Raw spreadsheet text or the parsed text of an existing element

    Returns:
        Escaped content, to be written without further escaping
    """
    # Leading spaces are kept, some strings rely on them for alignment
    return escape_fragment((text or "").rstrip())
