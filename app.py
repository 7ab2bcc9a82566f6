"""Streamlit entry point for the CSV Importer: upload, map columns, save."""

import streamlit as st

st.set_page_config(
    page_title="CSV Importer",
    page_icon="📥",
    layout="wide",
    initial_sidebar_state="expanded",
)

from csv_importer import messages
from csv_importer.ingest.normalizer import grid_frame
from csv_importer.notifications import render_pending
from csv_importer.state import (
    get_config, get_controller, init_session, handle_upload,
    selector_key, selector_options, uploader_key, on_mapping_change,
    on_save, on_reset_mappings, on_remove_grid_data, on_clear_everything,
)

init_session()
config = get_config()

st.title(messages.APP_NAME)

# Sidebar instructions
with st.sidebar:
    st.header("How it works")
    for line in messages.INSTRUCTIONS:
        st.markdown(f"- {line}")
    st.caption(f"Delimiter `{config.delimiter}` · encoding {config.encoding.upper()}")

uploaded = st.file_uploader(
    "Upload a CSV file",
    type=config.accepted_extensions,
    key=uploader_key(),
)
handle_upload(uploaded)

controller = get_controller()
headers = st.session_state.headers
rows = st.session_state.rows

if st.session_state.load_error:
    st.subheader(messages.LOAD_FAILED_HEADER)
    st.error(st.session_state.load_error)
elif headers:
    # One selector per CSV column, above the matching grid column
    selector_cols = st.columns(len(headers))
    for i, col in enumerate(selector_cols):
        with col:
            st.selectbox(
                f"Mapping for column {i + 1}",
                options=selector_options(i),
                key=selector_key(i),
                on_change=on_mapping_change,
                args=(i,),
                label_visibility="collapsed",
            )

    st.dataframe(
        grid_frame(headers, rows).to_pandas(),
        width="stretch",
        height=min(len(rows), config.preview_rows) * 35 + 38,
        hide_index=True,
    )
    st.caption(f"{len(rows):,} data rows · {len(controller.selected)} of {len(controller.catalog)} fields mapped")
else:
    st.info("Upload a CSV file to start mapping its columns.")

c1, c2, c3, c4 = st.columns(4)
with c1:
    st.button(messages.SAVE, type="primary", on_click=on_save, width="stretch")
with c2:
    st.button(messages.CLEAR_EVERYTHING, on_click=on_clear_everything, width="stretch")
with c3:
    st.button(messages.RESET_MAPPINGS, on_click=on_reset_mappings, width="stretch")
with c4:
    st.button(messages.REMOVE_GRID_DATA, on_click=on_remove_grid_data, width="stretch")

render_pending()
