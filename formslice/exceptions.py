from enum import Enum

from formslice.responses import ERROR_JSONResponse, JsonResponse, StatusCode


class ErrorKind(str, Enum):
    """Stable failure categories a caller can branch on."""

    INVALID_INPUT = "InvalidInput"
    INVALID_CONTENT_TYPE = "InvalidContentType"
    MALFORMED_SECTION = "MalformedSection"
    TERMINATOR_NOT_FOUND = "TerminatorNotFound"
    NO_FILES_FOUND = "NoFilesFound"
    INDEX_OUT_OF_RANGE = "IndexOutOfRange"
    BODY_TOO_LARGE = "BodyTooLarge"


class MultipartException(Exception):
    kind: ErrorKind = None  # just to help with type hinting
    status_code: int = StatusCode.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def http_response(self) -> JsonResponse:
        return ERROR_JSONResponse(self.kind.value, self.message, self.status_code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidInputException(MultipartException):
    kind = ErrorKind.INVALID_INPUT


class InvalidContentTypeException(MultipartException):
    kind = ErrorKind.INVALID_CONTENT_TYPE


class MalformedSectionException(MultipartException):
    kind = ErrorKind.MALFORMED_SECTION


class TerminatorNotFoundException(MultipartException):
    kind = ErrorKind.TERMINATOR_NOT_FOUND

    def __init__(
        self,
        message: str = (
            "Terminating boundary not found (uploaded file may be truncated "
            "or contain the boundary token)."
        ),
    ):
        super().__init__(message)


class NoFilesFoundException(MultipartException):
    kind = ErrorKind.NO_FILES_FOUND

    def __init__(self, message: str = "No files were detected in the uploaded data."):
        super().__init__(message)


class IndexOutOfRangeException(MultipartException, IndexError):
    kind = ErrorKind.INDEX_OUT_OF_RANGE


class BodyTooLargeException(MultipartException):
    kind = ErrorKind.BODY_TOO_LARGE
    status_code = StatusCode.PAYLOAD_TOO_LARGE
