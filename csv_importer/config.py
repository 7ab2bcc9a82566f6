"""Configuration dataclasses for the CSV Importer."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AppConfig:
    """Top-level application configuration."""
    project_root: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)
    data_dir: Path = field(default=None)

    # CSV wire format
    delimiter: str = ";"
    encoding: str = "utf-8"

    # Upload gate
    accepted_extensions: list[str] = field(default_factory=lambda: ["csv"])
    max_upload_mb: int = 200

    # Persisted record files
    users_file: str = "users.parquet"
    addresses_file: str = "addresses.parquet"

    # Rows shown in the grid before scrolling
    preview_rows: int = 15

    def __post_init__(self):
        if self.data_dir is None:
            self.data_dir = self.project_root / "data"
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def data_path(self, filename: str) -> Path:
        return self.data_dir / filename

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024
