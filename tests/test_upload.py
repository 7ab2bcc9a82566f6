"""Tests for the upload gate and load_upload."""

import pytest

from csv_importer.config import AppConfig
from csv_importer.errors import CsvParseError, UploadRejectedError
from csv_importer.ingest.pipeline import load_upload
from csv_importer.ingest.upload import check_upload


@pytest.fixture
def config(tmp_path):
    return AppConfig(data_dir=tmp_path, max_upload_mb=1)


def test_csv_accepted(config):
    check_upload("people.csv", 100, config)


def test_extension_case_insensitive(config):
    check_upload("PEOPLE.CSV", 100, config)


def test_other_extension_rejected(config):
    with pytest.raises(UploadRejectedError) as exc:
        check_upload("people.xlsx", 100, config)
    assert exc.value.message.startswith("File rejected: ")
    assert ".csv" in exc.value.message


def test_no_extension_rejected(config):
    with pytest.raises(UploadRejectedError):
        check_upload("people", 100, config)


def test_too_large_rejected(config):
    with pytest.raises(UploadRejectedError) as exc:
        check_upload("people.csv", 2 * 1024 * 1024, config)
    assert "1 MB" in exc.value.message


def test_load_upload_parses(config):
    parsed = load_upload("people.csv", b"First;Last\nJohn;Doe\n", config)
    assert parsed.headers == ["First", "Last"]
    assert parsed.rows == [["John", "Doe"]]


def test_load_upload_parse_error(config):
    with pytest.raises(CsvParseError):
        load_upload("people.csv", b'a\n"broken\n', config)
