"""
Parsing of the header block that opens every multipart section.
"""

import ntpath
from typing import NamedTuple, Optional, Tuple

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class SectionHeaders(NamedTuple):
    field_name: Optional[str]
    filename: Optional[str]
    content_type: str


def sanitize_filename(filename: str) -> str:
    """
    Reduce a client supplied filename to its bare basename.

    Both '/' and '\\' count as separators and a drive prefix is dropped, so
    '../../evil.txt' and 'C:\\temp\\evil.txt' both become 'evil.txt'.
    """
    basename = ntpath.basename(filename)
    if basename in (".", ".."):
        return ""
    return basename


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) > 1 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return value


def _parse_disposition(line: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Extract name and filename from a Content-Disposition line.

    Example: 'Content-Disposition: form-data; name="file"; filename="test.txt"'
    -> ('file', 'test.txt')
    """
    field_name = None
    filename = None

    for token in line.split(";"):
        key, sep, value = token.partition("=")
        if not sep:
            continue

        key = key.strip().lower()
        if key == "name":
            field_name = _unquote(value)
        elif key == "filename":
            filename = sanitize_filename(_unquote(value))

    return field_name, filename


def parse_section_headers(header_text: str) -> SectionHeaders:
    """
    Parse the raw header block of one section.

    Args:
        header_text: Text between the boundary line and the blank line ending the headers

    Returns:
        SectionHeaders with field name, filename and content type
    """
    field_name = None
    filename = None
    content_type = DEFAULT_CONTENT_TYPE

    for line in header_text.split("\r\n"):
        if not line:
            continue

        lowered = line.lower()
        if lowered.startswith("content-disposition"):
            name, file = _parse_disposition(line)
            if name is not None:
                field_name = name
            if file is not None:
                filename = file
        elif lowered.startswith("content-type"):
            _, sep, value = line.partition(":")
            if sep:
                content_type = value.strip()

    return SectionHeaders(field_name, filename, content_type)
