"""
FileRecord class holding one parsed multipart section.
"""

import io
from dataclasses import dataclass, field
from typing import IO, Any, Dict, Optional

from formslice.headers import DEFAULT_CONTENT_TYPE


@dataclass(frozen=True)
class FileRecord:
    """
    One section of a multipart/form-data body, with its payload held in memory.

    Use file_record.open() to get a standard Python file handle for reading.
    Use file_record.save() to dump the payload to disk.

    Attributes:
        field_name: Form field name from the Content-Disposition header, if any
        filename: Client filename reduced to its basename, None for plain form fields
        content_type: MIME type of the section
        data: Exact payload bytes of the section
    """

    field_name: Optional[str]
    filename: Optional[str]
    content_type: str = DEFAULT_CONTENT_TYPE
    data: bytes = field(default=b"", repr=False)

    @property
    def size(self) -> int:
        """Size of the payload in bytes"""
        return len(self.data)

    @property
    def is_file(self) -> bool:
        return self.filename is not None

    def read(self) -> bytes:
        return self.data

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self.data.decode(encoding, errors)

    def open(self, mode: str = "rb") -> IO[bytes]:
        """
        Open the payload for reading.

        Args:
            mode: File mode. Only 'rb' is allowed.

        Returns:
            Binary file handle positioned at the start of the payload

        Raises:
            ValueError: If any other mode is requested

        Example:
            with file_record.open() as f:
                header = f.read(100)
        """
        if mode != "rb":
            raise ValueError(
                "Only binary read access is allowed on uploaded payloads. "
                "Use save() to write the payload to disk."
            )

        return io.BytesIO(self.data)

    def save(self, path: str) -> None:
        """
        Save the payload to a specific path, replacing any existing file.

        Args:
            path: Destination path where the payload should be written

        Example:
            file_record.save('/path/to/documents/file.pdf')
        """
        with open(path, "wb") as f:
            f.write(self.data)

    def describe(self) -> Dict[str, Any]:
        """Metadata of the record as a JSON-ready dict (payload excluded)."""
        return {
            "field_name": self.field_name,
            "filename": self.filename,
            "content_type": self.content_type,
            "size": self.size,
        }

    def __repr__(self) -> str:
        return (
            f"FileRecord(field_name={self.field_name!r}, filename={self.filename!r}, "
            f"size={self.size}, content_type='{self.content_type}')"
        )
