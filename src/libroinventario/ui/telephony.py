"""
Llamada al proveedor: pide el permiso de llamada si hace falta y entrega a la
plataforma una URI `tel:` para marcar. No hay lógica de llamada en la aplicación.
"""

import logging
from typing import Optional, Protocol

from libroinventario.core import messages
from libroinventario.ui.book_list import Notifier

logger = logging.getLogger(__name__)


class TelephonyPlatform(Protocol):
    def has_call_permission(self) -> bool: ...

    def request_call_permission(self) -> None: ...

    def dial(self, uri: str) -> None: ...


class SupplierDialer:
    """Pide el permiso de llamada si hace falta y marca el teléfono del proveedor."""

    def __init__(self, platform: TelephonyPlatform, notifier: Notifier):
        self.platform = platform
        self.notifier = notifier
        self.pending_number: Optional[str] = None

    def call(self, phone_number: Optional[str]) -> bool:
        """
        Marca el número del proveedor.

        Returns:
            bool: True si se entregó la URI a la plataforma.
        """
        number = (phone_number or "").strip()
        if not number:
            return False
        if not self.platform.has_call_permission():
            logger.info("Call permission missing; requesting it.")
            self.pending_number = number
            self.platform.request_call_permission()
            return False
        self.platform.dial(f"tel:{number}")
        return True

    def on_permission_result(self, granted: bool) -> bool:
        number, self.pending_number = self.pending_number, None
        if not granted:
            self.notifier.notify(messages.PERMISSION_DENIED)
            return False
        return self.call(number)
