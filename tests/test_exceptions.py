"""
Unit tests for the error hierarchy and its JSON responses.
"""

import json

import pytest

from formslice.exceptions import (
    BodyTooLargeException,
    ErrorKind,
    IndexOutOfRangeException,
    InvalidContentTypeException,
    InvalidInputException,
    MalformedSectionException,
    MultipartException,
    NoFilesFoundException,
    TerminatorNotFoundException,
)


class TestErrorKinds:
    """Every exception carries a stable kind and a readable message."""

    @pytest.mark.parametrize(
        "exc, kind",
        [
            (InvalidInputException("Request body is empty."), ErrorKind.INVALID_INPUT),
            (InvalidContentTypeException("missing"), ErrorKind.INVALID_CONTENT_TYPE),
            (MalformedSectionException("bad"), ErrorKind.MALFORMED_SECTION),
            (TerminatorNotFoundException(), ErrorKind.TERMINATOR_NOT_FOUND),
            (NoFilesFoundException(), ErrorKind.NO_FILES_FOUND),
            (IndexOutOfRangeException("index 3"), ErrorKind.INDEX_OUT_OF_RANGE),
            (BodyTooLargeException("too big"), ErrorKind.BODY_TOO_LARGE),
        ],
    )
    def test_kind_and_message(self, exc, kind):
        assert isinstance(exc, MultipartException)
        assert exc.kind is kind
        assert exc.message
        assert str(exc) == exc.message

    def test_kind_values_are_stable_strings(self):
        assert ErrorKind.TERMINATOR_NOT_FOUND == "TerminatorNotFound"
        assert ErrorKind("NoFilesFound") is ErrorKind.NO_FILES_FOUND


class TestHttpResponse:
    """Test the JSON error response attached to each exception."""

    def test_bad_request(self):
        response = MalformedSectionException("header terminator not found").http_response
        data = response.render()

        assert data.status_code == 400
        assert json.loads(data.body) == {
            "error": {"type": "MalformedSection", "message": "header terminator not found"}
        }
        assert (b"content-type", b"application/json") in data.headers
        assert (b"content-length", str(len(data.body)).encode()) in data.headers

    def test_payload_too_large(self):
        assert BodyTooLargeException("too big").http_response.status_code == 413
