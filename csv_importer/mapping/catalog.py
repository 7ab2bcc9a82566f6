"""Target fields a CSV column can be mapped to."""

from dataclasses import dataclass, field
from typing import Callable, Optional

from csv_importer.models import Address, User

IGNORE = "Ignore"

PrimarySetter = Callable[[User, str], None]
SecondarySetter = Callable[[Address, str], None]


@dataclass(frozen=True)
class ColumnMapping:
    """A column's target: a display name plus the setters it drives.

    Two mappings are the same iff their names match; setters take no part in
    equality or hashing.
    """
    name: str
    apply_to_primary: Optional[PrimarySetter] = field(default=None, compare=False, repr=False)
    apply_to_secondary: Optional[SecondarySetter] = field(default=None, compare=False, repr=False)

    @property
    def is_ignore(self) -> bool:
        return self.name == IGNORE

    def apply(self, user: User, address: Address, value: str) -> None:
        """Run whichever setters this mapping has with the raw cell value."""
        if self.apply_to_primary is not None:
            self.apply_to_primary(user, value)
        if self.apply_to_secondary is not None:
            self.apply_to_secondary(address, value)

    def __str__(self) -> str:
        return self.name


def _setter(attr: str):
    def _set(record, value: str) -> None:
        setattr(record, attr, value)
    _set.__name__ = f"set_{attr}"
    return _set


# Display name -> (User attribute, Address attribute)
_FIELD_TABLE: list[tuple[str, Optional[str], Optional[str]]] = [
    ("First", "first_name", None),
    ("Last", "last_name", None),
    ("Address", None, "street"),
    ("ZIP", None, "postcode"),
    ("Country", None, "country"),
]


def build_mappings(table=None) -> tuple[ColumnMapping, ...]:
    """Resolve a field table into ColumnMapping values with bound setters."""
    if table is None:
        table = _FIELD_TABLE
    mappings = []
    for name, user_attr, address_attr in table:
        if name == IGNORE:
            raise ValueError(f"'{IGNORE}' is reserved for the sentinel mapping")
        mappings.append(ColumnMapping(
            name=name,
            apply_to_primary=_setter(user_attr) if user_attr else None,
            apply_to_secondary=_setter(address_attr) if address_attr else None,
        ))
    names = [m.name for m in mappings]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate mapping names in {names}")
    return tuple(mappings)


def is_ignore(mapping: Optional[ColumnMapping]) -> bool:
    """None and the sentinel both mean 'do not use this column'."""
    return mapping is None or mapping.is_ignore


class MappingCatalog:
    """Fixed, ordered set of non-Ignore mappings."""

    def __init__(self, mappings: tuple[ColumnMapping, ...] = None):
        self._mappings = mappings if mappings is not None else build_mappings()
        self._by_name = {m.name: m for m in self._mappings}

    def all_mappings(self) -> tuple[ColumnMapping, ...]:
        return self._mappings

    def ignore_mapping(self) -> ColumnMapping:
        """A fresh sentinel; compare by name, never by identity."""
        return ColumnMapping(IGNORE)

    def by_name(self, name: str) -> ColumnMapping:
        if name == IGNORE:
            return self.ignore_mapping()
        return self._by_name[name]

    def names(self) -> list[str]:
        return [m.name for m in self._mappings]

    def __len__(self) -> int:
        return len(self._mappings)
