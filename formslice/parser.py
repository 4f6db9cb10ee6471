"""
Multipart parser - in-memory implementation.

The whole body is scanned in a single pass: every boundary occurrence opens a
section whose header block is parsed and whose payload is sliced out as is.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from formslice import scanner
from formslice.boundary import resolve_boundary
from formslice.exceptions import (
    ErrorKind,
    InvalidInputException,
    MalformedSectionException,
    MultipartException,
    NoFilesFoundException,
    TerminatorNotFoundException,
)
from formslice.headers import parse_section_headers
from formslice.records import FileRecords
from formslice.upload_file import FileRecord

CRLF = b"\r\n"
HEADER_TERMINATOR = b"\r\n\r\n"
MULTIPART_FORM_DATA = "multipart/form-data"


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of try_parse(): either the parsed records or the error that stopped the parse.
    """

    records: Optional[FileRecords] = None
    error: Optional[MultipartException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> FileRecords:
        """Return the records, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.records


class MultipartParser:
    """
    Parser that splits a complete multipart/form-data body into FileRecords.

    The parser keeps no state between calls, so a single instance can be
    shared between threads. Every call returns a fresh FileRecords, and only
    when the whole body parsed successfully.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the multipart parser.

        Args:
            logger: Logger (or LoggerAdapter) for parse diagnostics. Defaults to the module logger.
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, body: Union[bytes, bytearray, memoryview], content_type: str) -> FileRecords:
        """
        Parse multipart data from a request body.

        Args:
            body: Complete request body
            content_type: Value of the request's Content-Type header

        Returns:
            FileRecords in order of appearance

        Raises:
            InvalidInputException: Empty body or not a multipart/form-data content type
            InvalidContentTypeException: Boundary parameter missing
            MalformedSectionException: A section header block is not terminated
            TerminatorNotFoundException: The boundary closing a section is missing
            NoFilesFoundException: The body contains no sections
        """
        try:
            records = self._parse(body, content_type)
        except MultipartException as exc:
            self.logger.warning("Multipart parse failed: %s: %s", exc.kind.value, exc.message)
            raise

        self.logger.debug("Multipart parse produced %d record(s)", len(records))
        return records

    def try_parse(
        self, body: Union[bytes, bytearray, memoryview], content_type: str
    ) -> ParseOutcome:
        """
        Same as parse(), but report failures in the returned ParseOutcome instead of raising.
        """
        try:
            return ParseOutcome(records=self.parse(body, content_type))
        except MultipartException as exc:
            return ParseOutcome(error=exc)

    def _parse(self, body, content_type: str) -> FileRecords:
        if body is None or len(body) == 0:
            raise InvalidInputException("Request body is empty.")

        if not content_type or not content_type.strip().lower().startswith(
            MULTIPART_FORM_DATA
        ):
            raise InvalidInputException("Request is not multipart/form-data.")

        if not isinstance(body, bytes):
            body = bytes(body)

        boundary = resolve_boundary(content_type)
        records = self._split(body, boundary)

        if not records:
            raise NoFilesFoundException()

        return FileRecords(records)

    def _split(self, body: bytes, boundary: bytes) -> List[FileRecord]:
        """
        Walk the body from boundary to boundary, producing one record per section.
        """
        records: List[FileRecord] = []
        data_marker = CRLF + boundary
        position = 0

        while True:
            occurrence = scanner.find(body, boundary, position)
            if occurrence == scanner.NOT_FOUND:
                break

            boundary_end = occurrence + len(boundary)
            header_start = boundary_end + len(CRLF)

            # '--token--' closes the body
            if header_start >= len(body) or body[boundary_end:header_start] == b"--":
                break

            header_end = scanner.find(body, HEADER_TERMINATOR, header_start)
            if header_end == scanner.NOT_FOUND:
                raise MalformedSectionException(
                    "Malformed multipart section: header terminator not found."
                )

            next_marker = scanner.find(body, data_marker, header_start)
            if next_marker != scanner.NOT_FOUND and next_marker < header_end:
                raise MalformedSectionException(
                    "Malformed multipart section: header terminator not found "
                    "before the next boundary."
                )

            header_text = body[header_start:header_end].decode("ascii", errors="replace")
            headers = parse_section_headers(header_text)

            data_start = header_end + len(HEADER_TERMINATOR)
            data_end = scanner.find(body, data_marker, data_start)
            if data_end == scanner.NOT_FOUND:
                raise TerminatorNotFoundException()

            if data_end < data_start:
                raise MalformedSectionException(
                    "Multipart parsing error: invalid data block indices."
                )

            record = FileRecord(
                field_name=headers.field_name,
                filename=headers.filename,
                content_type=headers.content_type,
                data=body[data_start:data_end],
            )
            self.logger.debug(
                "Section %d: field=%r filename=%r content_type=%s size=%d",
                len(records),
                record.field_name,
                record.filename,
                record.content_type,
                record.size,
            )
            records.append(record)

            # continue at the boundary that closed this section
            position = data_end + len(CRLF)

        return records


_default_parser = MultipartParser()


def parse_multipart(
    body: Union[bytes, bytearray, memoryview], content_type: str
) -> FileRecords:
    """Parse a multipart/form-data body with the default parser."""
    return _default_parser.parse(body, content_type)


def try_parse_multipart(
    body: Union[bytes, bytearray, memoryview], content_type: str
) -> ParseOutcome:
    """Parse a multipart/form-data body, returning a ParseOutcome instead of raising."""
    return _default_parser.try_parse(body, content_type)
