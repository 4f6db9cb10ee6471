from collections.abc import Sequence
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from formslice.exceptions import IndexOutOfRangeException
from formslice.upload_file import FileRecord


class FileRecords(Sequence):
    """
    Immutable, ordered result of one multipart parse.

    Records keep the order in which their sections appear in the body and
    field names are not required to be unique. Iteration does not consume the
    collection.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[FileRecord] = ()):
        self._records = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: Union[int, slice]) -> Union[FileRecord, "FileRecords"]:
        if isinstance(index, slice):
            return FileRecords(self._records[index])

        if not 0 <= index < len(self._records):
            raise IndexOutOfRangeException(
                f"Record index {index} out of range (0..{len(self._records) - 1})."
                if self._records
                else f"Record index {index} out of range (no records)."
            )
        return self._records[index]

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FileRecords):
            return self._records == other._records
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._records)

    def get(self, field_name: str) -> Optional[FileRecord]:
        """
        First record whose field name matches ``field_name`` ignoring case.

        Returns None when no record matches.
        """
        wanted = field_name.casefold()
        for record in self._records:
            if record.field_name is not None and record.field_name.casefold() == wanted:
                return record
        return None

    def get_all(self, field_name: str) -> List[FileRecord]:
        wanted = field_name.casefold()
        return [
            record
            for record in self._records
            if record.field_name is not None and record.field_name.casefold() == wanted
        ]

    @property
    def files(self) -> List[FileRecord]:
        """Records that carry a filename (file uploads)."""
        return [record for record in self._records if record.is_file]

    @property
    def fields(self) -> List[FileRecord]:
        """Records without a filename (plain form fields)."""
        return [record for record in self._records if not record.is_file]

    def form(self) -> Dict[str, str]:
        """
        Plain form fields as a dict of field name to text.

        The first occurrence of a field name wins. Values that are not valid
        UTF-8 are returned as empty strings.
        """
        form_data: Dict[str, str] = {}
        for record in self.fields:
            if record.field_name is None or record.field_name in form_data:
                continue
            try:
                form_data[record.field_name] = record.text()
            except UnicodeDecodeError:
                form_data[record.field_name] = ""
        return form_data

    def describe(self) -> List[Dict[str, Any]]:
        return [record.describe() for record in self._records]

    def __repr__(self) -> str:
        return f"<FileRecords count={len(self._records)}>"
