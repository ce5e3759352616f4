"""
Editor de un libro: alta de un libro nuevo o edición de uno existente.

El modo se fija al crear el editor: sin URI se crea un libro y con URI se
edita ese libro. Guardar valida los campos antes de llamar al proveedor; tanto
si el guardado o el borrado tienen éxito como si fallan, la sesión termina.
Cualquier toque en un campo marca el formulario como modificado y, a partir de
ahí, salir pide confirmación para descartar los cambios.
"""

import enum
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol

from libroinventario.core import messages
from libroinventario.data.contract import BookEntry
from libroinventario.provider.book_provider import BookProvider
from libroinventario.schemas.book import BookForm, BookSchema
from libroinventario.ui.book_list import Notifier
from libroinventario.ui.telephony import SupplierDialer

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "author", "price", "supplier", "supplier_phone")
QUANTITY_FIELD = "quantity"


class Confirmer(Protocol):
    def confirm(self, message: str) -> bool: ...


class EditorMode(enum.Enum):
    CREATING = "creating"
    EDITING = "editing"


class EditorResult(enum.Enum):
    SAVED = "saved"
    DELETED = "deleted"
    FAILED = "failed"
    INCOMPLETE = "incomplete"
    INVALID_PRICE = "invalid_price"
    CANCELLED = "cancelled"
    NOT_APPLICABLE = "not_applicable"


class BookEditor:
    """
    Estado y acciones del formulario de un libro.

    Atributos:
        book_uri (Optional[str]): URI del libro editado; None al crear uno nuevo.
        fields (Dict[str, str]): Texto actual de cada campo.
        quantity (int): Valor del contador de cantidad.
        has_changed (bool): True en cuanto se toca cualquier campo.
        finished (bool): True cuando la sesión de edición ha terminado.
    """

    def __init__(
        self,
        provider: BookProvider,
        notifier: Notifier,
        confirmer: Optional[Confirmer] = None,
        book_uri: Optional[str] = None,
        on_finish: Optional[Callable[[], None]] = None,
        dialer: Optional[SupplierDialer] = None,
    ):
        self.provider = provider
        self.notifier = notifier
        self.confirmer = confirmer
        self.book_uri = book_uri
        self.on_finish = on_finish
        self.dialer = dialer
        self.mode = EditorMode.CREATING if book_uri is None else EditorMode.EDITING
        self.fields: Dict[str, str] = {field: "" for field in TEXT_FIELDS}
        self.quantity = 1
        self.has_changed = False
        self.finished = False

    @property
    def editor_title(self) -> str:
        if self.mode is EditorMode.CREATING:
            return messages.EDITOR_TITLE_ADD
        return messages.EDITOR_TITLE_EDIT

    @property
    def can_delete(self) -> bool:
        return self.mode is EditorMode.EDITING

    can_order = can_delete

    # --- Field touch events ---

    def touch(self, field: str) -> None:
        if field not in TEXT_FIELDS and field != QUANTITY_FIELD:
            raise ValueError(f"Unknown editor field: {field}")
        self.has_changed = True

    def set_field(self, field: str, value: str) -> None:
        if field == QUANTITY_FIELD:
            raise ValueError("Use the quantity stepper to change the quantity")
        self.touch(field)
        self.fields[field] = value

    def increment_quantity(self) -> int:
        self.touch(QUANTITY_FIELD)
        self.quantity += 1
        return self.quantity

    def decrement_quantity(self) -> int:
        self.touch(QUANTITY_FIELD)
        if self.quantity > 0:
            self.quantity -= 1
        return self.quantity

    # --- Loading ---

    def load(self, uri: Optional[str] = None) -> bool:
        """
        Lee el libro enlazado y rellena el formulario.

        Returns:
            bool: True si se encontró el libro.
        """
        if self.mode is EditorMode.CREATING:
            return False
        uri = uri or self.book_uri
        with self.provider.query(uri, projection=BookEntry.ALL_COLUMNS) as cursor:
            return self.on_load_finished(0, cursor)

    def on_load_finished(self, loader_id: int, rows: Iterable[Mapping[str, Any]]) -> bool:
        row = next(iter(rows), None)
        if row is None:
            logger.info(f"Book {self.book_uri} not found; leaving the form untouched.")
            return False
        book = BookSchema.model_validate(dict(row))
        self.fields = {
            "name": book.name,
            "author": book.author,
            "price": str(book.price),
            "supplier": book.supplier or "",
            "supplier_phone": book.supplier_phone or "",
        }
        self.quantity = book.quantity
        return True

    def on_loader_reset(self, loader_id: int) -> None:
        self.fields = {field: "" for field in TEXT_FIELDS}

    # --- Actions ---

    def save(self) -> EditorResult:
        """
        Valida el formulario y lo guarda a través del proveedor.

        Returns:
            EditorResult: INCOMPLETE o INVALID_PRICE sin tocar la base de datos,
            SAVED o FAILED según el resultado del proveedor.
        """
        form = BookForm(**self.fields)
        if form.missing_fields():
            self.notifier.notify(messages.FILL_OUT_FIELDS)
            return EditorResult.INCOMPLETE
        price = form.parsed_price()
        if price is None or price <= 0:
            self.notifier.notify(messages.INVALID_PRICE)
            return EditorResult.INVALID_PRICE

        values = form.to_values(self.quantity)
        if self.mode is EditorMode.CREATING:
            new_uri = self.provider.insert(BookEntry.CONTENT_URI, values)
            succeeded = new_uri is not None
            self.notifier.notify(
                messages.EDITOR_INSERT_BOOK_SUCCESSFUL if succeeded else messages.EDITOR_INSERT_BOOK_FAILED
            )
        else:
            rows_updated = self.provider.update(self.book_uri, values)
            succeeded = rows_updated > 0
            self.notifier.notify(
                messages.EDITOR_EDIT_BOOK_SUCCESSFUL if succeeded else messages.EDITOR_EDIT_BOOK_FAILED
            )

        self.finish()
        return EditorResult.SAVED if succeeded else EditorResult.FAILED

    def delete(self) -> EditorResult:
        if self.mode is EditorMode.CREATING:
            return EditorResult.NOT_APPLICABLE
        rows_deleted = self.provider.delete(self.book_uri)
        if rows_deleted == 0:
            self.notifier.notify(messages.EDITOR_DELETE_BOOK_FAILED)
        else:
            self.notifier.notify(messages.EDITOR_DELETE_BOOK_SUCCESSFUL)
        self.finish()
        return EditorResult.DELETED if rows_deleted else EditorResult.FAILED

    def request_delete(self) -> EditorResult:
        if self.mode is EditorMode.CREATING:
            return EditorResult.NOT_APPLICABLE
        if not self._confirm(messages.DELETE_DIALOG_MSG):
            return EditorResult.CANCELLED
        return self.delete()

    def request_exit(self) -> bool:
        """
        Navegación hacia atrás. Si hay cambios sin guardar pide confirmación.

        Returns:
            bool: True si la edición terminó, False si el usuario sigue editando.
        """
        if not self.has_changed:
            self.finish()
            return True
        if self._confirm(messages.UNSAVED_CHANGES_DIALOG_MSG):
            self.finish()
            return True
        return False

    def order_more(self) -> bool:
        """Llama al proveedor del libro editado."""
        if not self.can_order or self.dialer is None:
            return False
        return self.dialer.call(self.fields["supplier_phone"])

    def finish(self) -> None:
        if self.finished:
            return
        self.finished = True
        if self.on_finish is not None:
            self.on_finish()

    def _confirm(self, message: str) -> bool:
        if self.confirmer is None:
            return False
        return self.confirmer.confirm(message)
