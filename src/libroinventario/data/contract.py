"""
Contrato de datos de LibroInventario.

Define el nombre de la tabla, los nombres de columna, los identificadores de
recurso (URIs) de la colección de libros y de un libro individual, y los tipos
de contenido que el proveedor devuelve en `get_type`.
"""

CONTENT_AUTHORITY = "com.example.libroinventario"
BASE_CONTENT_URI = f"content://{CONTENT_AUTHORITY}"
PATH_BOOKS = "books"

CURSOR_DIR_BASE_TYPE = "vnd.android.cursor.dir"
CURSOR_ITEM_BASE_TYPE = "vnd.android.cursor.item"


def with_appended_id(uri: str, item_id: int) -> str:
    """Añade un id numérico como último segmento de una URI."""
    return f"{uri.rstrip('/')}/{int(item_id)}"


def parse_id(uri: str) -> int:
    """
    Extrae el id numérico del último segmento de una URI de elemento.

    Raises:
        ValueError: Si el último segmento no es un entero.
    """
    last_segment = uri.rstrip("/").rsplit("/", 1)[-1]
    if not last_segment.isdigit():
        raise ValueError(f"URI has no numeric id segment: {uri}")
    return int(last_segment)


class BookEntry:
    """
    Constantes de la tabla de libros. Cada fila representa un libro.
    """
    CONTENT_URI = f"{BASE_CONTENT_URI}/{PATH_BOOKS}"

    CONTENT_LIST_TYPE = f"{CURSOR_DIR_BASE_TYPE}/{CONTENT_AUTHORITY}/{PATH_BOOKS}"
    CONTENT_ITEM_TYPE = f"{CURSOR_ITEM_BASE_TYPE}/{CONTENT_AUTHORITY}/{PATH_BOOKS}"

    TABLE_NAME = "books"

    _ID = "id"
    COLUMN_BOOK_NAME = "name"
    COLUMN_AUTHOR_NAME = "author"
    COLUMN_BOOK_PRICE = "price"
    COLUMN_BOOK_QUANTITY = "quantity"
    COLUMN_BOOK_SUPPLIER = "supplier"
    COLUMN_BOOK_SUPPLIER_PHONE = "supplier_phone"

    ALL_COLUMNS = (
        _ID,
        COLUMN_BOOK_NAME,
        COLUMN_AUTHOR_NAME,
        COLUMN_BOOK_PRICE,
        COLUMN_BOOK_QUANTITY,
        COLUMN_BOOK_SUPPLIER,
        COLUMN_BOOK_SUPPLIER_PHONE,
    )

    DEFAULT_AUTHOR = "Anonymous"

    @classmethod
    def item_uri(cls, book_id: int) -> str:
        """URI de un libro concreto: la URI de la colección más su id."""
        return with_appended_id(cls.CONTENT_URI, book_id)
