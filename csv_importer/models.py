"""Record types produced by an import."""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class Address:
    street: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None

    def is_populated(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


@dataclass
class User:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[Address] = None

    def is_populated(self) -> bool:
        """True if a name field holds a non-empty string. The address is not considered."""
        return bool(self.first_name or self.last_name)
