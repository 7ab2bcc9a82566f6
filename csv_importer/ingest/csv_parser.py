"""Parser for semicolon-delimited CSV uploads.

The whole upload is held in memory and read with the standard csv module in
strict mode. Quoted fields may contain the delimiter, line breaks and doubled
quotes (""). Cell text is returned exactly as written, without trimming.
"""

import csv
import io
from dataclasses import dataclass, field

from csv_importer.errors import CsvParseError

_BOM = "\ufeff"


@dataclass
class ParsedCsv:
    """Header row plus data rows of an uploaded file."""
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows


def _decode(data: bytes, encoding: str) -> str:
    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise CsvParseError(f"file is not valid {encoding} ({e})") from e
    if text.startswith(_BOM):
        text = text[1:]
    return text


def split_records(text: str, delimiter: str = ";") -> list[list[str]]:
    """Split decoded CSV text into records of raw field strings.

    Blank lines are skipped. Raises CsvParseError with the line the broken
    record starts on.
    """
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    records = []
    while True:
        start_line = reader.line_num + 1
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            # strict mode reports an open quote at end of input this way
            if "unexpected end of data" in str(e):
                reason = "unterminated quoted field"
            else:
                reason = str(e)
            raise CsvParseError(reason, line=start_line) from e
        if record and record != [""]:
            records.append(record)
    return records


def parse_csv_bytes(data: bytes, delimiter: str = ";", encoding: str = "utf-8") -> ParsedCsv:
    """Parse an uploaded file. The first record becomes the header row.

    An empty file yields an empty ParsedCsv rather than an error.
    """
    records = split_records(_decode(data, encoding), delimiter)
    if not records:
        return ParsedCsv()
    return ParsedCsv(headers=records[0], rows=records[1:])
