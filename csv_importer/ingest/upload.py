"""Accept or reject an uploaded file before it is parsed."""

from pathlib import PurePath

from csv_importer.config import AppConfig
from csv_importer.errors import UploadRejectedError


def check_upload(filename: str, size: int, config: AppConfig) -> None:
    """Raise UploadRejectedError if the file may not be imported."""
    suffix = PurePath(filename).suffix.lower().lstrip(".")
    accepted = [ext.lower().lstrip(".") for ext in config.accepted_extensions]
    if suffix not in accepted:
        allowed = ", ".join(f".{ext}" for ext in accepted)
        raise UploadRejectedError(f"only {allowed} files are accepted", filename)

    if size > config.max_upload_bytes:
        raise UploadRejectedError(
            f"file is larger than {config.max_upload_mb} MB", filename
        )
