# streamlit_app/pages/editor.py

import streamlit as st

from common import SessionConfirmer, StreamlitTelephony, ToastNotifier, get_provider
from libroinventario.core import messages
from libroinventario.data.contract import BookEntry
from libroinventario.loaders.loader_manager import load_once
from libroinventario.ui.editor import TEXT_FIELDS, BookEditor, EditorResult
from libroinventario.ui.telephony import SupplierDialer

FIELD_LABELS = {
    "name": "Name",
    "author": "Author",
    "price": "Price",
    "supplier": "Supplier",
    "supplier_phone": "Supplier phone",
}

ToastNotifier.flush()
notifier = ToastNotifier()
answers: dict = {}


def _back_to_list() -> None:
    st.session_state.pop("editor", None)
    st.switch_page("app.py")


# One editor per session; the mode is fixed when it is created.
if "editor" not in st.session_state:
    editor = BookEditor(
        get_provider(),
        notifier,
        confirmer=SessionConfirmer(answers),
        book_uri=st.session_state.get("editor_book_uri"),
        dialer=SupplierDialer(StreamlitTelephony(), notifier),
    )
    if editor.book_uri is not None:
        load_once(get_provider(), editor.book_uri, editor, projection=BookEntry.ALL_COLUMNS)
    st.session_state.editor = editor
editor: BookEditor = st.session_state.editor
editor.confirmer = SessionConfirmer(answers)

st.header(editor.editor_title)

for field in TEXT_FIELDS:
    value = st.text_input(FIELD_LABELS[field], value=editor.fields[field], key=f"field_{field}")
    if value != editor.fields[field]:
        editor.set_field(field, value)

qty_cols = st.columns([1, 1, 2])
if qty_cols[0].button("➖"):
    editor.decrement_quantity()
if qty_cols[1].button("➕"):
    editor.increment_quantity()
qty_cols[2].write(f"Quantity: {editor.quantity}")

st.divider()
action_cols = st.columns(4)

if action_cols[0].button("Save"):
    if editor.save() in (EditorResult.SAVED, EditorResult.FAILED):
        _back_to_list()

if editor.can_delete:
    answers[messages.DELETE_DIALOG_MSG] = st.checkbox(messages.DELETE_DIALOG_MSG, key="confirm_delete")
    if action_cols[1].button("Delete", disabled=not answers[messages.DELETE_DIALOG_MSG]):
        if editor.request_delete() in (EditorResult.DELETED, EditorResult.FAILED):
            _back_to_list()

if editor.has_changed:
    answers[messages.UNSAVED_CHANGES_DIALOG_MSG] = st.checkbox(
        messages.UNSAVED_CHANGES_DIALOG_MSG, key="confirm_discard"
    )
if action_cols[2].button("Back"):
    if editor.request_exit():
        _back_to_list()
    else:
        st.warning(messages.UNSAVED_CHANGES_DIALOG_MSG)

if editor.can_order:
    if action_cols[3].button("Order more"):
        editor.order_more()
    if st.session_state.get("permission_requested"):
        st.info("Allow this app to start phone calls?")
        perm_cols = st.columns(2)
        if perm_cols[0].button("Allow"):
            st.session_state.call_permission = True
            st.session_state.permission_requested = False
            editor.dialer.on_permission_result(True)
        if perm_cols[1].button("Deny"):
            st.session_state.permission_requested = False
            editor.dialer.on_permission_result(False)
    dial_uri = st.session_state.pop("dial_uri", None)
    if dial_uri:
        st.markdown(f"[📞 Call supplier]({dial_uri})")

ToastNotifier.flush()
