"""Keeps the per-column mapping selectors mutually consistent.

One controller owns every selector's value and offered options plus the
derived set of chosen names. No selector changes another directly: every edit
goes through ``apply_change`` and ends in a single recomputation pass.
"""

from typing import Callable, Optional

from csv_importer.mapping.catalog import ColumnMapping, MappingCatalog, is_ignore

# listener(column_index, offered_options, value)
SelectorListener = Callable[[int, list[ColumnMapping], ColumnMapping], None]


def compute_offered_options(
    values: list[Optional[ColumnMapping]],
    catalog: MappingCatalog,
) -> tuple[list[list[ColumnMapping]], ColumnMapping]:
    """Offered options for every selector given all current selections.

    Every selector gets the catalog (in catalog order) minus every chosen
    name, then the Ignore sentinel last. Returns (options per selector,
    shared Ignore instance).
    """
    selected = {v.name for v in values if not is_ignore(v)}
    ignore = catalog.ignore_mapping()
    available = [m for m in catalog.all_mappings() if m.name not in selected]
    available.append(ignore)
    return [list(available) for _ in values], ignore


class ColumnMappingController:
    """Selector state for one uploaded file."""

    def __init__(self, catalog: MappingCatalog = None):
        self.catalog = catalog if catalog is not None else MappingCatalog()
        self._values: list[ColumnMapping] = []
        self._options: list[list[ColumnMapping]] = []
        self._selected: set[str] = set()
        self._listeners: list[SelectorListener] = []
        self._updating = False
        self.pass_count = 0

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def column_count(self) -> int:
        return len(self._values)

    @property
    def selected(self) -> frozenset[str]:
        """Names of non-Ignore mappings currently chosen by any selector."""
        return frozenset(self._selected)

    def current_selector_value(self, column_index: int) -> ColumnMapping:
        self._check_index(column_index)
        return self._values[column_index]

    def offered_options(self, column_index: int) -> list[ColumnMapping]:
        self._check_index(column_index)
        return list(self._options[column_index])

    def resolved_mappings(self) -> list[ColumnMapping]:
        """Current value of every selector, index-aligned with row cells."""
        return list(self._values)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def subscribe(self, listener: SelectorListener) -> None:
        """Call listener for every selector at the end of each pass."""
        self._listeners.append(listener)

    def init_selectors(self, column_count: int) -> None:
        if column_count < 0:
            raise ValueError(f"column_count must be >= 0, got {column_count}")
        self._values = [self.catalog.ignore_mapping() for _ in range(column_count)]
        self._selected = set()
        self._refresh()

    def apply_change(self, column_index: int, new_value: Optional[ColumnMapping]) -> None:
        """Set one selector's value. Entry point for UI edits."""
        self._check_index(column_index)
        self.on_selector_changed(column_index, self._values[column_index], new_value)

    def on_selector_changed(
        self,
        column_index: int,
        old_value: Optional[ColumnMapping],
        new_value: Optional[ColumnMapping],
    ) -> None:
        """React to a selector going from old_value to new_value.

        Ignored while a pass is running: listeners that echo the values they
        are given back into the controller do not start a second pass.
        """
        if self._updating:
            return
        self._check_index(column_index)

        new_value = self._resolve(new_value)
        current = self._values[column_index]

        if not is_ignore(old_value) and not self._held_elsewhere(old_value, column_index):
            self._selected.discard(old_value.name)
        if not is_ignore(current):
            self._selected.discard(current.name)

        if not is_ignore(new_value):
            # Another selector holding the same name falls back to Ignore
            for j, value in enumerate(self._values):
                if j != column_index and value == new_value:
                    self._values[j] = self.catalog.ignore_mapping()
            self._selected.add(new_value.name)

        self._values[column_index] = new_value
        self._refresh()

    def reset_all(self) -> None:
        """Every selector back to Ignore in one pass."""
        self._values = [self.catalog.ignore_mapping() for _ in self._values]
        self._selected = set()
        self._refresh()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, value: Optional[ColumnMapping]) -> ColumnMapping:
        # Callers may hand over any equal-by-name instance; use the catalog's
        if is_ignore(value):
            return self.catalog.ignore_mapping()
        try:
            return self.catalog.by_name(value.name)
        except KeyError:
            raise ValueError(f"Unknown mapping: {value.name!r}") from None

    def _held_elsewhere(self, value: ColumnMapping, column_index: int) -> bool:
        return any(j != column_index and v == value for j, v in enumerate(self._values))

    def _refresh(self) -> None:
        self._updating = True
        try:
            self._options, ignore = compute_offered_options(self._values, self.catalog)
            # All Ignore selectors share the instance their option lists offer
            self._values = [ignore if is_ignore(v) else v for v in self._values]
            self.pass_count += 1
            for i, (options, value) in enumerate(zip(self._options, self._values)):
                for listener in self._listeners:
                    listener(i, list(options), value)
        finally:
            self._updating = False

    def _check_index(self, column_index: int) -> None:
        if not 0 <= column_index < len(self._values):
            raise IndexError(
                f"column_index {column_index} out of range for {len(self._values)} selectors"
            )
