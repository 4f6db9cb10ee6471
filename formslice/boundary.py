from formslice.exceptions import InvalidContentTypeException

BOUNDARY_MARKER = "boundary="
DELIMITER_PREFIX = b"--"


def resolve_boundary(content_type: str) -> bytes:
    """
    Extract the wire-level delimiter from a Content-Type header.

    Example: 'multipart/form-data; boundary=----WebKitFormBoundary7MA4YWxkTrZu0gW'
    -> b'------WebKitFormBoundary7MA4YWxkTrZu0gW'

    Raises:
        InvalidContentTypeException: If the boundary parameter is missing or empty
    """
    # Find 'boundary=' in the content type, ignoring case
    boundary_start = content_type.lower().find(BOUNDARY_MARKER)
    if boundary_start == -1:
        raise InvalidContentTypeException("Boundary parameter missing in content type.")

    # Move past 'boundary=' and stop at the next parameter, if any
    value_start = boundary_start + len(BOUNDARY_MARKER)
    value_end = content_type.find(";", value_start)
    if value_end == -1:
        value_end = len(content_type)

    boundary = content_type[value_start:value_end].strip()

    # Remove quotes if present
    if len(boundary) > 1 and boundary.startswith('"') and boundary.endswith('"'):
        boundary = boundary[1:-1]

    if not boundary:
        raise InvalidContentTypeException("Boundary parameter is empty in content type.")

    try:
        token = boundary.encode("ascii")
    except UnicodeEncodeError:
        raise InvalidContentTypeException(
            "Boundary parameter contains non-ASCII characters."
        ) from None

    return DELIMITER_PREFIX + token
