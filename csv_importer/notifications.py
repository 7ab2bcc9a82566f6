"""User notifications for the import page.

Only the latest notification is kept: showing a new one replaces whatever
was pending. Messages are queued in session state so they survive the rerun
that follows a button callback, and are rendered once as a toast.
"""

from enum import Enum

import streamlit as st

_PENDING_KEY = "pending_notification"


class Severity(str, Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"
    PRIMARY = "primary"


_ICONS = {
    Severity.DEFAULT: None,
    Severity.SUCCESS: ":material/check_circle:",
    Severity.ERROR: ":material/error:",
    Severity.PRIMARY: ":material/info:",
}


def show(message: str, severity: Severity = Severity.DEFAULT) -> None:
    """Queue a notification, replacing any pending one."""
    st.session_state[_PENDING_KEY] = (message, Severity(severity))


def render_pending() -> None:
    """Display and clear the queued notification, if any."""
    pending = st.session_state.pop(_PENDING_KEY, None)
    if pending is None:
        return
    message, severity = pending
    st.toast(message, icon=_ICONS[severity])
