# streamlit_app/app.py

import logging

import streamlit as st

from common import ToastNotifier, get_provider
from libroinventario.core import messages
from libroinventario.crud import LIST_PROJECTION, delete_all_books, insert_dummy_book
from libroinventario.data.contract import BookEntry
from libroinventario.loaders.loader_manager import load_once
from libroinventario.ui.book_list import BookListPresenter

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Inventario de Libros", page_icon="📚")
ToastNotifier.flush()

provider = get_provider()
presenter = BookListPresenter(provider, ToastNotifier())

# --- Sidebar: catalog actions ---
st.sidebar.title("Catálogo")
if st.sidebar.button("Insert dummy data"):
    insert_dummy_book(provider)
    st.rerun()

confirm_delete_all = st.sidebar.checkbox(messages.DELETE_ALL_DIALOG_MSG, key="confirm_delete_all")
if st.sidebar.button("Delete all books", disabled=not confirm_delete_all):
    delete_all_books(provider)
    st.session_state.confirm_delete_all = False
    st.rerun()

# --- Main content: inventory list ---
st.header("Inventario")
if st.button("➕ Add book"):
    st.session_state.editor_book_uri = None
    st.session_state.pop("editor", None)
    st.switch_page("pages/editor.py")

try:
    load_once(
        provider,
        BookEntry.CONTENT_URI,
        presenter,
        projection=LIST_PROJECTION,
        sort_order=f"{BookEntry._ID} ASC",
    )
except Exception as e:
    st.error(f"Error cargando el inventario: {e}")
    logger.exception("Error loading the inventory list")
    st.stop()

if presenter.is_empty:
    st.subheader(messages.EMPTY_INVENTORY_TITLE)
    st.caption(messages.EMPTY_INVENTORY_SUBTITLE)
else:
    for position, item in enumerate(presenter.items):
        cols = st.columns([4, 2, 2, 1, 1])
        cols[0].markdown(f"**{item.name}**")
        cols[1].write(item.price_text)
        cols[2].write(f"Quantity: {item.quantity_text}")
        if cols[3].button("Sale", key=f"sale_{item.book_id}"):
            if presenter.sell(position):
                st.rerun()
        if cols[4].button("Edit", key=f"edit_{item.book_id}"):
            st.session_state.editor_book_uri = item.uri
            st.session_state.pop("editor", None)
            st.switch_page("pages/editor.py")

ToastNotifier.flush()
