"""Orchestrates an import: upload -> rows, and rows + mappings -> saved users."""

from dataclasses import dataclass
from typing import Optional, Sequence

from csv_importer.config import AppConfig
from csv_importer.errors import EmptyResultError
from csv_importer.ingest.csv_parser import ParsedCsv, parse_csv_bytes
from csv_importer.ingest.upload import check_upload
from csv_importer.mapping.catalog import ColumnMapping
from csv_importer.storage import UserRepository
from csv_importer.transform.rows import map_rows_to_users
from csv_importer.transform.validator import validate_import


@dataclass
class ImportResult:
    rows_read: int
    users_saved: int

    @property
    def rows_dropped(self) -> int:
        return self.rows_read - self.users_saved


def load_upload(filename: str, data: bytes, config: AppConfig = None) -> ParsedCsv:
    """Check and parse an uploaded file.

    Raises UploadRejectedError or CsvParseError; an empty file parses fine
    and is caught later by validation.
    """
    if config is None:
        config = AppConfig()

    check_upload(filename, len(data), config)
    parsed = parse_csv_bytes(data, delimiter=config.delimiter, encoding=config.encoding)
    print(f"Loaded {filename}: {parsed.column_count} columns, {len(parsed.rows)} data rows")
    return parsed


def run_import(
    rows: Sequence[Sequence[str]],
    mappings: Sequence[Optional[ColumnMapping]],
    repository: UserRepository,
) -> ImportResult:
    """Validate, transform and persist one batch.

    Raises StructuralValidationError, IncompleteMappingError, EmptyResultError
    or PersistenceError; nothing is saved unless every step succeeds.
    """
    validate_import(rows, mappings)

    users = map_rows_to_users(rows, mappings)
    print(f"Mapped {len(rows)} rows: {len(users)} kept, {len(rows) - len(users)} empty rows dropped")
    if not users:
        raise EmptyResultError(len(rows))

    saved = repository.save_all(users)
    return ImportResult(rows_read=len(rows), users_saved=saved)
