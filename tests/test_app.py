"""Tests for the import page and its session actions."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from csv_importer.config import AppConfig
from csv_importer.storage import UserRepository

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"

# AppTest cannot drive st.file_uploader, so a file staged under "preload"
# is loaded through the same path an upload takes before the page runs.
_PAGE_WITH_PRELOAD = f"""
import runpy

import streamlit as st

from csv_importer.state import init_session, load_file

init_session()
preload = st.session_state.pop("preload", None)
if preload is not None:
    load_file(*preload)
runpy.run_path({str(APP_PATH)!r})
"""

ALL_OPTIONS = ["First", "Last", "Address", "ZIP", "Country", "Ignore"]
PEOPLE_CSV = b"first;last;zip\nJohn;Doe;1010\nJane;Roe;8010\n"


@pytest.fixture
def config(tmp_path):
    return AppConfig(data_dir=tmp_path)


@pytest.fixture
def page(config):
    def _page(data: bytes = None, filename: str = "people.csv") -> AppTest:
        at = AppTest.from_string(_PAGE_WITH_PRELOAD, default_timeout=30)
        at.session_state["config"] = config
        if data is not None:
            at.session_state["preload"] = (filename, data, "file-1")
        at.run()
        assert not at.exception
        return at
    return _page


def _values(at):
    return [s.value for s in at.selectbox]


def test_page_renders_without_file(page):
    at = page()
    assert at.title[0].value == "CSV Importer"
    assert [b.label for b in at.button] == [
        "Save", "Clear everything", "Reset mappings", "Remove grid data",
    ]
    assert len(at.selectbox) == 0


def test_save_without_data_reports_invalid_structure(page):
    at = page()
    at.button[0].click().run()
    assert not at.exception
    assert at.toast[0].value == "Invalid CSV structure!"


def test_upload_creates_one_ignore_selector_per_column(page):
    at = page(PEOPLE_CSV)
    assert _values(at) == ["Ignore", "Ignore", "Ignore"]
    assert all(s.options == ALL_OPTIONS for s in at.selectbox)


def test_mapping_change_updates_other_selectors(page):
    at = page(PEOPLE_CSV)
    at.selectbox[0].select("First").run()

    assert _values(at) == ["First", "Ignore", "Ignore"]
    assert at.selectbox[0].options == ALL_OPTIONS
    assert at.selectbox[1].options == ["Last", "Address", "ZIP", "Country", "Ignore"]
    assert at.selectbox[2].options == ["Last", "Address", "ZIP", "Country", "Ignore"]


def test_reset_returns_every_selector_to_ignore(page):
    at = page(PEOPLE_CSV)
    at.selectbox[0].select("ZIP").run()
    at.selectbox[1].select("Last").run()
    assert _values(at) == ["ZIP", "Last", "Ignore"]
    assert at.selectbox[2].options == ["First", "Address", "Country", "Ignore"]

    at.button[2].click().run()

    assert _values(at) == ["Ignore", "Ignore", "Ignore"]
    assert all(s.options == ALL_OPTIONS for s in at.selectbox)


def test_save_persists_mapped_rows(page, config):
    at = page(PEOPLE_CSV)
    at.selectbox[0].select("First").run()
    at.selectbox[1].select("Last").run()
    at.selectbox[2].select("ZIP").run()

    at.button[0].click().run()

    assert at.toast[0].value == "Data saved successfully! (2 users)"
    saved = UserRepository(config).load_users()
    assert saved["first_name"].to_list() == ["John", "Jane"]
    assert saved["postcode"].to_list() == ["1010", "8010"]


def test_parse_error_shown_instead_of_grid(page):
    at = page(b'a;b\n1;"open\n')
    assert at.subheader[0].value == "Failed to import CSV file"
    assert at.error[0].value.startswith("Unable to load CSV: ")
    assert len(at.selectbox) == 0


def test_rejected_upload_notifies(page):
    at = page(b"a;b\n1;2\n", filename="people.txt")
    assert at.toast[0].value.startswith("File rejected: ")
    assert len(at.selectbox) == 0


def test_remove_grid_data_keeps_file_loaded(page):
    at = page(PEOPLE_CSV)
    at.button[3].click().run()
    assert len(at.selectbox) == 0
    assert at.info[0].value == "Upload a CSV file to start mapping its columns."
    assert at.session_state["loaded_file_id"] == "file-1"


def test_clear_everything_forgets_file(page):
    at = page(PEOPLE_CSV)
    at.selectbox[0].select("First").run()
    at.button[1].click().run()
    assert len(at.selectbox) == 0
    assert at.session_state["loaded_file_id"] is None
    assert at.session_state["uploader_version"] == 1
