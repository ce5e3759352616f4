"""
Registro de observadores de contenido (publicación/suscripción).

Cada URI tiene un conjunto ordenado de callbacks que se invocan de forma
síncrona cuando el proveedor notifica un cambio en esa URI o en una URI
descendiente (un cambio en `books/7` también avisa a los observadores de `books`).
"""

import logging
import threading
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]


def _ancestors(uri: str) -> List[str]:
    """La propia URI seguida de sus ancestros hasta la raíz de la autoridad."""
    scheme, _, rest = uri.rstrip("/").partition("://")
    segments = rest.split("/")
    return [
        f"{scheme}://{'/'.join(segments[:end])}"
        for end in range(len(segments), 1, -1)
    ]


class ContentObservers:
    """Registro de observadores por URI. Es seguro usarlo desde varios hilos."""

    def __init__(self):
        self._lock = threading.Lock()
        self._observers: Dict[str, Dict[ChangeCallback, None]] = {}

    def register(self, uri: str, callback: ChangeCallback) -> None:
        """Suscribe `callback` a los cambios de `uri` y de sus descendientes."""
        with self._lock:
            self._observers.setdefault(uri.rstrip("/"), {})[callback] = None

    def unregister(self, uri: str, callback: ChangeCallback) -> None:
        """Quita la suscripción; no falla si no existía."""
        key = uri.rstrip("/")
        with self._lock:
            callbacks = self._observers.get(key)
            if not callbacks:
                return
            callbacks.pop(callback, None)
            if not callbacks:
                del self._observers[key]

    def observers_for(self, uri: str) -> List[ChangeCallback]:
        with self._lock:
            return list(self._observers.get(uri.rstrip("/"), {}))

    def notify_change(self, uri: str) -> int:
        """
        Avisa a los observadores de `uri` y de sus ancestros.

        Returns:
            int: Número de callbacks invocados.
        """
        with self._lock:
            targets = [
                callback
                for key in _ancestors(uri)
                for callback in self._observers.get(key, {})
            ]
        logger.debug(f"Notifying {len(targets)} observer(s) of change at {uri}")
        for callback in targets:
            callback(uri)
        return len(targets)
