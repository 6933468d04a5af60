# data/repository.py
from __future__ import annotations

from pathlib import Path

from config import get_settings

# One member per line, comma separated, no header:
# id,name,phone,birthday,lifetimeSpend,points,pointsRate,annualSpend,tierIndex,lastYear
FIELD_SEPARATOR = ","


class MemberRepository:
    def __init__(self, storage_dir: Path | None = None):
        # base folder for data files given by bare name
        if storage_dir is None:
            storage_dir = get_settings().storage_dir
        self.storage_dir = Path(storage_dir)

    def _file_path(self, filename) -> Path:
        path = Path(filename)
        # absolute or explicitly relative paths are used as given
        if path.is_absolute() or path.parent != Path("."):
            return path
        return self.storage_dir / path

    def read_records(self, filename) -> list[list[str]]:
        # Load raw records from disk. Raises OSError if the file cannot be opened,
        # UnicodeDecodeError if it is not UTF-8.
        # Field count is not checked here; the caller decides what to keep.
        path = self._file_path(filename)
        records = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\r\n")
                if line == "":
                    continue
                # a trailing separator does not start another field
                if line.endswith(FIELD_SEPARATOR):
                    line = line[:-1]
                records.append(line.split(FIELD_SEPARATOR))
        return records

    def write_records(self, filename, records: list[list[str]]) -> Path:
        # Overwrite the file wholesale. Raises OSError on failure.
        path = self._file_path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            for fields in records:
                f.write(FIELD_SEPARATOR.join(fields) + "\n")
        return path
