"""Display helpers for CSV headers and the grid view."""

import re

import polars as pl

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[_\-\s]+")


def humanize_header(header: str) -> str:
    """Turn a raw header like 'firstName' or 'zip_code' into 'First name' / 'Zip code'.

    Only used for display; header text never drives the mapping.
    """
    name = header.strip().strip('"').strip("'").strip()
    if not name:
        return ""
    name = _CAMEL_BOUNDARY_RE.sub(" ", name)
    name = _SEPARATOR_RE.sub(" ", name).strip()

    words = name.split(" ")
    # Keep acronyms like ZIP or ID as written
    rest = [w if w.isupper() and len(w) > 1 else w.lower() for w in words[1:]]
    first = words[0] if words[0].isupper() and len(words[0]) > 1 else words[0].capitalize()
    return " ".join([first, *rest])


def grid_column_labels(headers: list[str]) -> list[str]:
    """Unique display labels for the grid, one per header.

    Blank and repeated headers get their 1-based column number appended so
    the grid never sees duplicate column names.
    """
    labels = []
    seen = set()
    for i, header in enumerate(headers, start=1):
        label = humanize_header(header) or f"Column {i}"
        if label in seen:
            label = f"{label} ({i})"
        seen.add(label)
        labels.append(label)
    return labels


def grid_frame(headers: list[str], rows: list[list[str]]) -> pl.DataFrame:
    """All-string DataFrame for the grid view.

    Rows shorter than the header are padded with blanks and longer ones are
    cut, so a ragged file can still be shown before validation rejects it.
    """
    labels = grid_column_labels(headers)
    width = len(labels)
    schema = {label: pl.Utf8 for label in labels}
    if not rows:
        return pl.DataFrame(schema=schema)
    fitted = [(list(row) + [""] * width)[:width] for row in rows]
    return pl.DataFrame(fitted, schema=schema, orient="row")
