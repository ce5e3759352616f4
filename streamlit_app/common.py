# streamlit_app/common.py
# Shared glue between the Streamlit widgets and the inventory core.

import logging

import streamlit as st

from libroinventario.core.config import settings
from libroinventario.db.session import get_db_helper
from libroinventario.provider.book_provider import BookProvider

logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')


@st.cache_resource
def get_provider() -> BookProvider:
    return BookProvider(get_db_helper())


class ToastNotifier:
    """Queues notices in session_state so they survive a page switch."""

    def notify(self, message: str) -> None:
        st.session_state.setdefault("pending_toasts", []).append(message)

    @staticmethod
    def flush() -> None:
        for message in st.session_state.pop("pending_toasts", []):
            st.toast(message)


class SessionConfirmer:
    """Confirms when the user has ticked the matching checkbox on the page."""

    def __init__(self, answers: dict):
        self.answers = answers

    def confirm(self, message: str) -> bool:
        return bool(self.answers.get(message, False))


class StreamlitTelephony:
    """Call permission lives in session_state; dialing renders a tel: link."""

    def has_call_permission(self) -> bool:
        return st.session_state.get("call_permission", False)

    def request_call_permission(self) -> None:
        st.session_state.permission_requested = True

    def dial(self, uri: str) -> None:
        st.session_state.dial_uri = uri
