"""
Carga asíncrona de consultas para la lista y el editor.

Cada componente que muestra datos tiene su propio `LoaderManager`. Un loader,
identificado por un entero, ejecuta la consulta del proveedor en un hilo de
trabajo (`asyncio.to_thread`) y entrega las filas en el hilo del bucle de
eventos. Solo se entrega el resultado de la última generación de cada loader,
y nada después de destruirlo. Un cambio notificado en la URI observada vuelve
a lanzar la carga.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from libroinventario.provider.book_provider import BookProvider

logger = logging.getLogger(__name__)


class LoaderCallbacks(Protocol):
    def on_load_finished(self, loader_id: int, rows: List[Dict[str, Any]]) -> None: ...

    def on_loader_reset(self, loader_id: int) -> None: ...


def _retrieve_failure(task: asyncio.Task) -> None:
    # Marks the exception as retrieved; _run already logged it.
    if not task.cancelled():
        task.exception()


class _Loader:
    def __init__(self, loader_id: int, uri: str, callbacks: LoaderCallbacks, query_args: Dict[str, Any]):
        self.loader_id = loader_id
        self.uri = uri
        self.callbacks = callbacks
        self.query_args = query_args
        self.generation = 0
        self.task: Optional[asyncio.Task] = None
        self.rows: Optional[List[Dict[str, Any]]] = None
        self.destroyed = False
        self.observer = None


class LoaderManager:
    """
    Gestiona los loaders de un componente.

    Atributos:
        provider (BookProvider): Proveedor contra el que se ejecutan las consultas.
    """

    def __init__(self, provider: BookProvider, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.provider = provider
        self._loop = loop
        self._loaders: Dict[int, _Loader] = {}
        self._destroyed = False

    def _event_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def init_loader(
        self,
        loader_id: int,
        uri: str,
        callbacks: LoaderCallbacks,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> asyncio.Task:
        """
        Crea el loader y lanza su primera carga; si ya existe, devuelve su tarea actual.

        Debe llamarse desde el hilo del bucle de eventos.
        """
        if self._destroyed:
            raise RuntimeError("LoaderManager has been destroyed")
        loader = self._loaders.get(loader_id)
        if loader is not None and loader.task is not None:
            return loader.task

        loader = _Loader(
            loader_id,
            uri,
            callbacks,
            {
                "projection": projection,
                "selection": selection,
                "selection_args": selection_args,
                "sort_order": sort_order,
            },
        )
        loader.observer = lambda changed_uri: self._on_content_changed(loader_id)
        self._loaders[loader_id] = loader
        self.provider.register_observer(uri, loader.observer)
        return self.restart_loader(loader_id)

    def restart_loader(self, loader_id: int) -> asyncio.Task:
        """Lanza una nueva generación; la anterior, si sigue en curso, se cancela y se descarta."""
        loader = self._loaders[loader_id]
        loader.generation += 1
        if loader.task is not None and not loader.task.done():
            loader.task.cancel()
        loader.task = self._event_loop().create_task(self._run(loader, loader.generation))
        loader.task.add_done_callback(_retrieve_failure)
        return loader.task

    async def _run(self, loader: _Loader, generation: int) -> Optional[List[Dict[str, Any]]]:
        try:
            rows = await asyncio.to_thread(self._load_rows, loader)
        except asyncio.CancelledError:
            logger.debug(f"Loader {loader.loader_id} generation {generation} cancelled.")
            raise
        except Exception:
            logger.exception(f"Loader {loader.loader_id} failed querying {loader.uri}")
            raise

        if self._destroyed or loader.destroyed or generation != loader.generation:
            logger.debug(f"Discarding stale result of loader {loader.loader_id} (generation {generation}).")
            return None
        loader.rows = rows
        loader.callbacks.on_load_finished(loader.loader_id, rows)
        return rows

    def _load_rows(self, loader: _Loader) -> List[Dict[str, Any]]:
        with self.provider.query(loader.uri, **loader.query_args) as cursor:
            return [dict(row) for row in cursor]

    def _on_content_changed(self, loader_id: int) -> None:
        # Mutations may run on any thread; restarts always happen on the loop.
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._restart_if_alive, loader_id)

    def _restart_if_alive(self, loader_id: int) -> None:
        if not self._destroyed and loader_id in self._loaders:
            self.restart_loader(loader_id)

    def get_rows(self, loader_id: int) -> Optional[List[Dict[str, Any]]]:
        """Últimas filas entregadas por el loader, si las hay."""
        loader = self._loaders.get(loader_id)
        return loader.rows if loader is not None else None

    def has_loader(self, loader_id: int) -> bool:
        return loader_id in self._loaders

    def destroy_loader(self, loader_id: int) -> None:
        loader = self._loaders.pop(loader_id, None)
        if loader is None:
            return
        loader.destroyed = True
        self.provider.unregister_observer(loader.uri, loader.observer)
        if loader.task is not None and not loader.task.done():
            loader.task.cancel()
        loader.callbacks.on_loader_reset(loader_id)

    def destroy(self) -> None:
        """Desmonta el componente: cancela cargas pendientes y descarta resultados tardíos."""
        for loader_id in list(self._loaders):
            self.destroy_loader(loader_id)
        self._destroyed = True

    async def wait_idle(self) -> None:
        """Espera a que no quede ninguna carga pendiente (incluidos reinicios ya programados)."""
        while True:
            await asyncio.sleep(0)
            pending = [
                loader.task
                for loader in self._loaders.values()
                if loader.task is not None and not loader.task.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)


class _KeepOnReset:
    """Entrega las filas al destino pero no lo vacía al desmontar el loader."""

    def __init__(self, target: LoaderCallbacks):
        self.target = target

    def on_load_finished(self, loader_id: int, rows: List[Dict[str, Any]]) -> None:
        self.target.on_load_finished(loader_id, rows)

    def on_loader_reset(self, loader_id: int) -> None:
        pass


def load_once(
    provider: BookProvider,
    uri: str,
    callbacks: LoaderCallbacks,
    loader_id: int = 0,
    **query_args: Any,
) -> Optional[List[Dict[str, Any]]]:
    """
    Ejecuta una única carga en un bucle propio y desmonta el loader al terminar.

    Pensado para interfaces que se vuelven a dibujar en cada interacción,
    como Streamlit: las filas entregadas se conservan en `callbacks`.

    Returns:
        Optional[List[Dict[str, Any]]]: Filas entregadas.

    Raises:
        Exception: El error de la consulta, si falla.
    """
    async def _load():
        manager = LoaderManager(provider)
        try:
            return await manager.init_loader(loader_id, uri, _KeepOnReset(callbacks), **query_args)
        finally:
            manager.destroy()

    return asyncio.run(_load())
