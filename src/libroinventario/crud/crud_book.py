"""
Operaciones de catálogo sobre el inventario, construidas encima del proveedor.
Incluye listar libros, insertar un libro de ejemplo y vaciar el inventario.
Pensado para ser utilizado por la interfaz Streamlit y los scripts.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..data.contract import BookEntry
from ..provider.book_provider import BookProvider

logger = logging.getLogger(__name__)

LIST_PROJECTION = (
    BookEntry._ID,
    BookEntry.COLUMN_BOOK_NAME,
    BookEntry.COLUMN_BOOK_PRICE,
    BookEntry.COLUMN_BOOK_QUANTITY,
)

DUMMY_BOOK: Dict[str, Any] = {
    BookEntry.COLUMN_BOOK_NAME: "Dune",
    BookEntry.COLUMN_AUTHOR_NAME: "Frank Herbert",
    BookEntry.COLUMN_BOOK_PRICE: 9.99,
    BookEntry.COLUMN_BOOK_QUANTITY: 3,
    BookEntry.COLUMN_BOOK_SUPPLIER: "Acme Books",
    BookEntry.COLUMN_BOOK_SUPPLIER_PHONE: "555-1234",
}

def list_books(provider: BookProvider, sort_order: str = f"{BookEntry._ID} ASC") -> List[Dict[str, Any]]:
    """
    Obtiene las columnas que muestra la lista para todos los libros.

    Args:
        provider (BookProvider): Proveedor de libros.
        sort_order (str): Orden de la consulta.

    Returns:
        List[Dict[str, Any]]: Filas como diccionarios.
    """
    with provider.query(BookEntry.CONTENT_URI, projection=LIST_PROJECTION, sort_order=sort_order) as cursor:
        return [dict(row) for row in cursor]

def get_book(provider: BookProvider, book_id: int) -> Optional[Dict[str, Any]]:
    """
    Recupera todas las columnas de un libro por su id.

    Returns:
        Optional[Dict[str, Any]]: La fila si existe, None si no.
    """
    with provider.query(BookEntry.item_uri(book_id)) as cursor:
        row = next(cursor, None)
    return dict(row) if row is not None else None

def insert_dummy_book(provider: BookProvider, values: Optional[Mapping[str, Any]] = None) -> Optional[str]:
    """Inserta un libro de ejemplo y devuelve su URI (None si falla)."""
    new_uri = provider.insert(BookEntry.CONTENT_URI, values or DUMMY_BOOK)
    if new_uri is None:
        logger.error("Dummy book could not be inserted.")
    return new_uri

def delete_all_books(provider: BookProvider) -> int:
    """Elimina todos los libros del inventario."""
    rows_deleted = provider.delete(BookEntry.CONTENT_URI)
    logger.info(f"{rows_deleted} rows deleted from the inventory.")
    return rows_deleted
