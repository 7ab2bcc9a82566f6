"""Parquet-backed persistence for imported users and their addresses."""

from pathlib import Path

import polars as pl

from csv_importer.config import AppConfig
from csv_importer.errors import PersistenceError
from csv_importer.models import User

USER_SCHEMA = {
    "id": pl.Int64,
    "first_name": pl.Utf8,
    "last_name": pl.Utf8,
}

ADDRESS_SCHEMA = {
    "id": pl.Int64,
    "user_id": pl.Int64,
    "street": pl.Utf8,
    "postcode": pl.Utf8,
    "country": pl.Utf8,
}


def read_parquet(path: Path, schema: dict) -> pl.DataFrame:
    """Read a Polars DataFrame from parquet, or an empty frame if the file is missing."""
    if not path.exists():
        return pl.DataFrame(schema=schema)
    return pl.read_parquet(path)


def write_parquet(df: pl.DataFrame, path: Path) -> None:
    """Write a Polars DataFrame to parquet."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(path)


def _next_id(df: pl.DataFrame) -> int:
    if len(df) == 0:
        return 1
    return int(df["id"].max()) + 1


class UserRepository:
    """Appends imported users to parquet files under the configured data dir."""

    def __init__(self, config: AppConfig):
        self.users_path = config.data_path(config.users_file)
        self.addresses_path = config.data_path(config.addresses_file)

    def save_all(self, users: list[User]) -> int:
        """Persist users and their addresses as one batch. Returns the number saved.

        Both files are staged next to their targets and only swapped in once
        both writes succeeded. Staged files never outlive the call.
        """
        staged_users = self.users_path.with_name(self.users_path.name + ".tmp")
        staged_addresses = self.addresses_path.with_name(self.addresses_path.name + ".tmp")
        try:
            existing_users = read_parquet(self.users_path, USER_SCHEMA)
            existing_addresses = read_parquet(self.addresses_path, ADDRESS_SCHEMA)

            user_id = _next_id(existing_users)
            address_id = _next_id(existing_addresses)
            user_rows = []
            address_rows = []
            for user in users:
                user_rows.append({
                    "id": user_id,
                    "first_name": user.first_name,
                    "last_name": user.last_name,
                })
                if user.address is not None:
                    address_rows.append({
                        "id": address_id,
                        "user_id": user_id,
                        "street": user.address.street,
                        "postcode": user.address.postcode,
                        "country": user.address.country,
                    })
                    address_id += 1
                user_id += 1

            all_users = pl.concat([
                existing_users.cast(USER_SCHEMA),
                pl.DataFrame(user_rows, schema=USER_SCHEMA),
            ])
            all_addresses = pl.concat([
                existing_addresses.cast(ADDRESS_SCHEMA),
                pl.DataFrame(address_rows, schema=ADDRESS_SCHEMA),
            ])

            write_parquet(all_users, staged_users)
            write_parquet(all_addresses, staged_addresses)
            self._commit(staged_users, staged_addresses)
        except (OSError, pl.exceptions.PolarsError) as e:
            raise PersistenceError(str(e)) from e
        finally:
            staged_users.unlink(missing_ok=True)
            staged_addresses.unlink(missing_ok=True)

        print(f"Saved {len(user_rows)} users, {len(address_rows)} addresses to {self.users_path.parent}")
        return len(user_rows)

    def _commit(self, staged_users: Path, staged_addresses: Path) -> None:
        """Swap both staged files in; if users cannot be swapped, put the old addresses back."""
        previous_addresses = self.addresses_path.read_bytes() if self.addresses_path.exists() else None
        staged_addresses.replace(self.addresses_path)
        try:
            staged_users.replace(self.users_path)
        except OSError:
            if previous_addresses is None:
                self.addresses_path.unlink(missing_ok=True)
            else:
                self.addresses_path.write_bytes(previous_addresses)
            raise

    def load_users(self) -> pl.DataFrame:
        """All saved users joined with their address fields."""
        users = read_parquet(self.users_path, USER_SCHEMA)
        addresses = read_parquet(self.addresses_path, ADDRESS_SCHEMA)
        return (
            users.join(
                addresses.select(["user_id", "street", "postcode", "country"]),
                left_on="id",
                right_on="user_id",
                how="left",
            )
            .sort("id")
        )
