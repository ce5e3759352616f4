"""
Presentador de la lista de libros.

Convierte las filas de una consulta sobre la colección en elementos de lista
(nombre, precio con moneda, cantidad) y gestiona la acción de venta de cada
fila. La URI de cada libro se captura al enlazar la fila, no se deduce de su
posición en pantalla en el momento del clic.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Protocol

from pydantic import BaseModel

from libroinventario.core import messages
from libroinventario.core.config import settings
from libroinventario.data.contract import BookEntry
from libroinventario.provider.book_provider import BookProvider

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


def format_price(price: float, currency_symbol: str = "$") -> str:
    return f"{currency_symbol}{price:.2f}"


class BookListItem(BaseModel):
    """
    Estado visible de una fila de la lista.

    Atributos:
        book_id (int): Id del libro enlazado.
        uri (str): URI del libro, capturada al enlazar.
        name (str): Título mostrado.
        price_text (str): Precio formateado.
        quantity_text (str): Cantidad mostrada; es la que usa la acción de venta.
    """
    book_id: int
    uri: str
    name: str
    price_text: str
    quantity_text: str


class BookListPresenter:
    """
    Enlaza las filas del inventario con la lista y ejecuta la acción de venta.

    Atributos:
        provider (BookProvider): Proveedor usado para registrar las ventas.
        notifier (Notifier): Recibe los avisos para el usuario.
        currency_symbol (str): Símbolo antepuesto a los precios.
    """

    def __init__(
        self,
        provider: BookProvider,
        notifier: Notifier,
        currency_symbol: Optional[str] = None,
    ):
        self.provider = provider
        self.notifier = notifier
        self.currency_symbol = currency_symbol if currency_symbol is not None else settings.CURRENCY_SYMBOL
        self.items: List[BookListItem] = []

    def bind_row(self, row: Mapping[str, Any]) -> BookListItem:
        book_id = int(row[BookEntry._ID])
        return BookListItem(
            book_id=book_id,
            uri=BookEntry.item_uri(book_id),
            name=row[BookEntry.COLUMN_BOOK_NAME],
            price_text=format_price(float(row[BookEntry.COLUMN_BOOK_PRICE]), self.currency_symbol),
            quantity_text=str(int(row[BookEntry.COLUMN_BOOK_QUANTITY])),
        )

    def swap_rows(self, rows: Optional[Iterable[Mapping[str, Any]]]) -> List[BookListItem]:
        """Sustituye las filas enlazadas. `None` vacía la lista."""
        self.items = [self.bind_row(row) for row in rows] if rows is not None else []
        return self.items

    # LoaderCallbacks
    def on_load_finished(self, loader_id: int, rows) -> None:
        self.swap_rows(rows)

    def on_loader_reset(self, loader_id: int) -> None:
        self.swap_rows(None)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def item_at(self, position: int) -> BookListItem:
        return self.items[position]

    def sell(self, position: int) -> bool:
        """
        Vende una unidad del libro de la fila `position`.

        Returns:
            bool: True si se descontó una unidad, False si estaba agotado.
        """
        item = self.items[position]
        old_quantity = int(item.quantity_text)
        if old_quantity == 0:
            self.notifier.notify(messages.SOLD_OUT)
            return False

        new_quantity = old_quantity - 1
        item.quantity_text = str(new_quantity)
        rows_updated = self.provider.update(item.uri, {BookEntry.COLUMN_BOOK_QUANTITY: new_quantity})
        if rows_updated == 0:
            logger.warning(f"Sale of {item.uri} did not update any row.")
        return True

    def sell_book(self, book_id: int) -> bool:
        for position, item in enumerate(self.items):
            if item.book_id == book_id:
                return self.sell(position)
        raise ValueError(f"Book {book_id} is not in the list")
