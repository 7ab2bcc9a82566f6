"""Structural checks run before rows are turned into records."""

from typing import Optional, Sequence

from csv_importer.errors import IncompleteMappingError, StructuralValidationError
from csv_importer.mapping.catalog import ColumnMapping


def validate_import(
    rows: Sequence[Sequence[str]],
    mappings: Sequence[Optional[ColumnMapping]],
) -> None:
    """Raise if the rows and mappings cannot be transformed.

    Any data row whose width differs from the selector count fails the whole
    batch; ragged files are never partly imported.
    """
    if not rows:
        raise StructuralValidationError({"rows": 0, "selectors": len(mappings)})

    bad_rows = [i for i, row in enumerate(rows) if len(row) != len(mappings)]
    if bad_rows:
        raise StructuralValidationError({
            "rows": len(rows),
            "selectors": len(mappings),
            "mismatched_rows": bad_rows[:20],
        })

    unmapped = [i for i, mapping in enumerate(mappings) if mapping is None]
    if unmapped:
        raise IncompleteMappingError(unmapped)
