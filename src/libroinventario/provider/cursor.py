"""
Cursor de solo avance sobre el resultado de una consulta.

El cursor posee su conexión y la libera al agotarse o al cerrarse.
Se recorre una única vez; para volver a leer hay que repetir la consulta.
"""

from typing import Iterator, List, Optional

from sqlalchemy.engine import Connection, CursorResult, RowMapping


class BookCursor:
    """
    Iterador de filas (`RowMapping`) de una consulta del proveedor.

    Atributos:
        columns (List[str]): Columnas presentes en cada fila.
    """

    def __init__(self, connection: Connection, result: CursorResult):
        self._connection: Optional[Connection] = connection
        self._result = result
        self._rows = result.mappings()
        self.columns: List[str] = list(result.keys())

    def __iter__(self) -> Iterator[RowMapping]:
        return self

    def __next__(self) -> RowMapping:
        if self._connection is None:
            raise StopIteration
        row = self._rows.fetchone()
        if row is None:
            self.close()
            raise StopIteration
        return row

    def fetch_all(self) -> List[RowMapping]:
        """Consume las filas restantes y cierra el cursor."""
        return list(self)

    @property
    def is_closed(self) -> bool:
        return self._connection is None

    def close(self) -> None:
        if self._connection is None:
            return
        try:
            self._result.close()
        finally:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "BookCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

