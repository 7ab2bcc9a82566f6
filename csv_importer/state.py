"""Streamlit session state management and import page actions."""

import streamlit as st

from csv_importer.config import AppConfig
from csv_importer.errors import CsvImportError, CsvParseError, PersistenceError
from csv_importer.ingest.pipeline import load_upload, run_import
from csv_importer.mapping.catalog import ColumnMapping
from csv_importer.mapping.controller import ColumnMappingController
from csv_importer import messages
from csv_importer.notifications import Severity, show
from csv_importer.storage import UserRepository


def get_config() -> AppConfig:
    """Get or create the AppConfig singleton."""
    if "config" not in st.session_state:
        st.session_state.config = AppConfig()
    return st.session_state.config


def get_repository() -> UserRepository:
    return UserRepository(get_config())


def init_session() -> None:
    """Seed the keys the import page reads on every run."""
    defaults = {
        "headers": [],
        "rows": [],
        "load_error": None,
        "loaded_file_id": None,
        "uploader_version": 0,
        "grid_version": 0,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
    get_controller()


# ---------------------------------------------------------------------------
# Mapping selectors
# ---------------------------------------------------------------------------

def uploader_key() -> str:
    return f"csv_upload_{st.session_state.uploader_version}"


def selector_key(column_index: int) -> str:
    return f"mapping_{st.session_state.grid_version}_{column_index}"


def _sync_selector(column_index: int, options: list[ColumnMapping], value: ColumnMapping) -> None:
    # Runs inside controller passes, before the selectbox is drawn this run
    st.session_state[selector_key(column_index)] = value.name


def get_controller() -> ColumnMappingController:
    """Get or create the session's mapping controller."""
    if "controller" not in st.session_state:
        controller = ColumnMappingController()
        controller.subscribe(_sync_selector)
        st.session_state.controller = controller
    return st.session_state.controller


def selector_options(column_index: int) -> list[str]:
    """Names for one selectbox: the controller's offered options plus the
    selector's own choice, which a selectbox must list to display it."""
    controller = get_controller()
    offered = {m.name for m in controller.offered_options(column_index)}
    own = controller.current_selector_value(column_index).name
    names = [name for name in controller.catalog.names() if name in offered or name == own]
    return names + [controller.catalog.ignore_mapping().name]


def on_mapping_change(column_index: int) -> None:
    """Selectbox callback: push the widget's new value through the controller."""
    controller = get_controller()
    name = st.session_state[selector_key(column_index)]
    controller.apply_change(column_index, controller.catalog.by_name(name))


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------

def _set_grid(headers: list[str], rows: list[list[str]], load_error: str | None = None) -> None:
    st.session_state.grid_version += 1
    st.session_state.headers = headers
    st.session_state.rows = rows
    st.session_state.load_error = load_error
    get_controller().init_selectors(len(headers))


def handle_upload(uploaded_file) -> None:
    """Load the uploader's current file, if any, into the grid."""
    if uploaded_file is None:
        return
    load_file(uploaded_file.name, uploaded_file.getvalue(), uploaded_file.file_id)


def load_file(filename: str, data: bytes, file_id: str) -> None:
    """Parse a file into the grid. Re-runs with the same file_id are no-ops."""
    if file_id == st.session_state.loaded_file_id:
        return
    st.session_state.loaded_file_id = file_id

    try:
        parsed = load_upload(filename, data, get_config())
    except CsvParseError as e:
        _set_grid([], [], load_error=e.message)
        show(e.message, Severity.ERROR)
        return
    except CsvImportError as e:
        _set_grid([], [])
        show(e.message)
        return

    _set_grid(parsed.headers, parsed.rows)


# ---------------------------------------------------------------------------
# Buttons
# ---------------------------------------------------------------------------

def on_save() -> None:
    controller = get_controller()
    try:
        result = run_import(
            st.session_state.rows,
            controller.resolved_mappings(),
            get_repository(),
        )
    except PersistenceError as e:
        show(e.message, Severity.ERROR)
        return
    except CsvImportError as e:
        show(e.message)
        return
    show(f"{messages.SAVE_SUCCESS} ({result.users_saved} users)", Severity.SUCCESS)


def on_reset_mappings() -> None:
    get_controller().reset_all()


def on_remove_grid_data() -> None:
    _set_grid([], [])


def on_clear_everything() -> None:
    get_controller().reset_all()
    _set_grid([], [])
    st.session_state.loaded_file_id = None
    st.session_state.uploader_version += 1
