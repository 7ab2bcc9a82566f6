"""Turn validated CSV rows into User/Address record pairs."""

from typing import Optional, Sequence

from csv_importer.mapping.catalog import ColumnMapping, is_ignore
from csv_importer.models import Address, User


def map_row(row: Sequence[str], mappings: Sequence[Optional[ColumnMapping]]) -> User | None:
    """Build one User (with linked Address) from a row, or None if nothing was set.

    Cell values go to the setters untouched. A blank cell counts as unset.
    """
    user = User()
    address = Address()

    for value, mapping in zip(row, mappings):
        if is_ignore(mapping):
            continue
        mapping.apply(user, address, value)

    if not (user.is_populated() or address.is_populated()):
        return None

    user.address = address
    return user


def map_rows_to_users(
    rows: Sequence[Sequence[str]],
    mappings: Sequence[Optional[ColumnMapping]],
) -> list[User]:
    """Transform every row, keeping row order and dropping unpopulated rows."""
    users = []
    for row in rows:
        user = map_row(row, mappings)
        if user is not None:
            users.append(user)
    return users
