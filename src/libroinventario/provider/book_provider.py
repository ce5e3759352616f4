"""
Proveedor de contenido de libros: el único componente que accede al almacenamiento.

Traduce una URI (colección `books` o libro `books/<id>`) y un filtro opcional en
operaciones SQL sobre la tabla de libros. Las selecciones son fragmentos
`WHERE` con marcadores `?` que se enlazan en orden con `selection_args`.
Tras cada mutación que cambia alguna fila se avisa a los observadores de la URI.
"""

import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from sqlalchemy import Table, delete, insert, select, text, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.elements import ColumnElement

from libroinventario.data.contract import BookEntry, parse_id
from libroinventario.db.session import InventoryDbHelper
from libroinventario.models.book import Book
from libroinventario.provider.cursor import BookCursor
from libroinventario.provider.observers import ContentObservers
from libroinventario.provider.uri_matcher import BOOK_ID, BOOKS, build_book_matcher

logger = logging.getLogger(__name__)

books_table: Table = Book.__table__

# Quoted literals are matched first so a `?` inside them is not a placeholder.
_SELECTION_TOKEN = re.compile(r"""'(?:[^']|'')*'|"(?:[^"]|"")*"|\?""")


def _selection_clause(selection: Optional[str], selection_args: Optional[Sequence[Any]]):
    """Convierte `"quantity > ? AND name = ?"` + args en un `text()` con parámetros enlazados."""
    if not selection:
        return None
    args = list(selection_args or [])
    params: Dict[str, Any] = {}

    def _bind(match) -> str:
        token = match.group(0)
        if token != "?":
            return token
        index = len(params)
        params[f"arg{index}"] = args[index] if index < len(args) else None
        return f":arg{index}"

    sql = _SELECTION_TOKEN.sub(_bind, selection)
    if len(params) != len(args):
        raise ValueError(
            f"Selection has {len(params)} placeholder(s) but {len(args)} argument(s) were given"
        )
    return text(sql).bindparams(**params)


def _check_columns(names) -> None:
    unknown = [name for name in names if name not in books_table.c]
    if unknown:
        raise ValueError(f"Unknown column(s) for table {BookEntry.TABLE_NAME}: {', '.join(unknown)}")


class BookProvider:
    """
    Media entre la interfaz y el almacenamiento de libros.

    Atributos:
        db_helper (InventoryDbHelper): Abre la base de datos en el primer uso.
        observers (ContentObservers): Registro de observadores por URI.
    """

    def __init__(self, db_helper: InventoryDbHelper, observers: Optional[ContentObservers] = None):
        self.db_helper = db_helper
        self.observers = observers if observers is not None else ContentObservers()
        self._matcher = build_book_matcher()
        self._query_handlers = {BOOKS: self._collection_filter, BOOK_ID: self._item_filter}
        self._update_handlers = {BOOKS: self._collection_filter, BOOK_ID: self._item_filter}
        self._delete_handlers = {BOOKS: self._collection_filter, BOOK_ID: self._item_filter}
        self._insert_handlers = {BOOKS: self._insert_book}
        self._types = {BOOKS: BookEntry.CONTENT_LIST_TYPE, BOOK_ID: BookEntry.CONTENT_ITEM_TYPE}

    def _route(self, handlers: Dict[int, Any], uri: str, operation: str):
        handler = handlers.get(self._matcher.match(uri))
        if handler is None:
            raise ValueError(f"{operation} is not supported for unknown URI {uri}")
        return handler

    @staticmethod
    def _collection_filter(uri: str, selection, selection_args) -> Optional[ColumnElement]:
        return _selection_clause(selection, selection_args)

    @staticmethod
    def _item_filter(uri: str, selection, selection_args) -> ColumnElement:
        return books_table.c[BookEntry._ID] == parse_id(uri)

    def get_type(self, uri: str) -> str:
        """Tipo de contenido de la URI: lista de libros o libro individual."""
        return self._route(self._types, uri, "get_type")

    def query(
        self,
        uri: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> BookCursor:
        """
        Consulta libros.

        Args:
            uri (str): URI de la colección o de un libro (en cuyo caso se ignora `selection`).
            projection (Optional[Sequence[str]]): Columnas a devolver; todas si es vacía.
            selection (Optional[str]): Fragmento WHERE con marcadores `?`.
            selection_args (Optional[Sequence[Any]]): Valores de los marcadores.
            sort_order (Optional[str]): Fragmento ORDER BY.

        Returns:
            BookCursor: Cursor perezoso de una sola pasada.
        """
        where_clause = self._route(self._query_handlers, uri, "Query")(uri, selection, selection_args)
        if projection:
            _check_columns(projection)
            stmt = select(*(books_table.c[name] for name in projection))
        else:
            stmt = select(books_table)
        if where_clause is not None:
            stmt = stmt.where(where_clause)
        if sort_order:
            stmt = stmt.order_by(text(sort_order))

        engine = self.db_helper.open_or_create()
        connection = engine.connect()
        try:
            result = connection.execute(stmt)
        except Exception:
            connection.close()
            raise
        return BookCursor(connection, result)

    def insert(self, uri: str, values: Mapping[str, Any]) -> Optional[str]:
        """
        Inserta un libro en la colección.

        Returns:
            Optional[str]: URI del libro nuevo, o None si la inserción falló.
        """
        return self._route(self._insert_handlers, uri, "Insertion")(uri, values)

    def _insert_book(self, uri: str, values: Mapping[str, Any]) -> Optional[str]:
        _check_columns(values)
        engine = self.db_helper.open_or_create()
        try:
            with engine.begin() as connection:
                result = connection.execute(insert(books_table).values(**dict(values)))
                new_id = result.inserted_primary_key[0]
        except IntegrityError as e:
            logger.error(f"Failed to insert row for {uri}: {e.orig}")
            return None

        logger.info(f"Inserted book {new_id}.")
        self.observers.notify_change(uri)
        return BookEntry.item_uri(new_id)

    def update(
        self,
        uri: str,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """
        Actualiza las filas que coinciden con la URI y la selección.

        Returns:
            int: Número de filas actualizadas (0 si ninguna coincide o si falla una restricción).
        """
        where_clause = self._route(self._update_handlers, uri, "Update")(uri, selection, selection_args)
        if not values:
            return 0
        _check_columns(values)
        if BookEntry._ID in values:
            raise ValueError("The book id cannot be updated")

        stmt = update(books_table).values(**dict(values))
        if where_clause is not None:
            stmt = stmt.where(where_clause)
        engine = self.db_helper.open_or_create()
        try:
            with engine.begin() as connection:
                rows_updated = connection.execute(stmt).rowcount
        except IntegrityError as e:
            logger.error(f"Failed to update {uri}: {e.orig}")
            return 0

        return self._after_mutation(uri, rows_updated, "Updated")

    def delete(
        self,
        uri: str,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """
        Elimina las filas que coinciden con la URI y la selección.

        Returns:
            int: Número de filas eliminadas.
        """
        where_clause = self._route(self._delete_handlers, uri, "Deletion")(uri, selection, selection_args)
        stmt = delete(books_table)
        if where_clause is not None:
            stmt = stmt.where(where_clause)
        engine = self.db_helper.open_or_create()
        with engine.begin() as connection:
            rows_deleted = connection.execute(stmt).rowcount

        return self._after_mutation(uri, rows_deleted, "Deleted")

    def _after_mutation(self, uri: str, row_count: int, verb: str) -> int:
        if row_count > 0:
            logger.info(f"{verb} {row_count} row(s) at {uri}.")
            self.observers.notify_change(uri)
        else:
            logger.info(f"{verb} no rows at {uri}.")
        return row_count

    def register_observer(self, uri: str, callback: Callable[[str], None]) -> None:
        self.observers.register(uri, callback)

    def unregister_observer(self, uri: str, callback: Callable[[str], None]) -> None:
        self.observers.unregister(uri, callback)
