from .parser import MultipartParser, ParseOutcome, parse_multipart, try_parse_multipart
from .upload_file import FileRecord
from .records import FileRecords
from .boundary import resolve_boundary
from .headers import parse_section_headers, sanitize_filename
from .config import ParserConfig
from .exceptions import (
    ErrorKind,
    MultipartException,
    InvalidInputException,
    InvalidContentTypeException,
    MalformedSectionException,
    TerminatorNotFoundException,
    NoFilesFoundException,
    IndexOutOfRangeException,
    BodyTooLargeException,
)

__version__ = "0.1.0"
__all__ = [
    "MultipartParser",
    "ParseOutcome",
    "parse_multipart",
    "try_parse_multipart",
    "FileRecord",
    "FileRecords",
    "resolve_boundary",
    "parse_section_headers",
    "sanitize_filename",
    "ParserConfig",
    "ErrorKind",
    "MultipartException",
    "InvalidInputException",
    "InvalidContentTypeException",
    "MalformedSectionException",
    "TerminatorNotFoundException",
    "NoFilesFoundException",
    "IndexOutOfRangeException",
    "BodyTooLargeException",
]
