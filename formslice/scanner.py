"""
Literal byte search used by the multipart splitter.
"""

from typing import Union

NOT_FOUND = -1


def find(haystack: Union[bytes, bytearray], needle: bytes, from_index: int = 0) -> int:
    """
    Find the first occurrence of ``needle`` in ``haystack`` at or after ``from_index``.

    The search is literal (no pattern syntax). A negative ``from_index`` is
    treated as 0.

    Args:
        haystack: Bytes to search in
        needle: Exact byte sequence to look for
        from_index: First position a match may start at

    Returns:
        Lowest matching start index, or NOT_FOUND
    """
    if from_index < 0:
        from_index = 0
    if from_index > len(haystack):
        return NOT_FOUND

    return haystack.find(needle, from_index)
