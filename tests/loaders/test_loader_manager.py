# tests/loaders/test_loader_manager.py
import asyncio
import gc

import pytest

from libroinventario.data.contract import BookEntry
from libroinventario.loaders.loader_manager import LoaderManager, load_once
from libroinventario.ui.book_list import BookListPresenter
from libroinventario.ui.editor import BookEditor

BOOK_LOADER = 0

class RecordingCallbacks:
    def __init__(self):
        self.deliveries = []
        self.resets = []

    def on_load_finished(self, loader_id, rows):
        self.deliveries.append((loader_id, rows))

    def on_loader_reset(self, loader_id):
        self.resets.append(loader_id)

def test_initial_load_delivers_rows(provider, dune_values):
    provider.insert(BookEntry.CONTENT_URI, dune_values)
    callbacks = RecordingCallbacks()

    async def scenario():
        manager = LoaderManager(provider)
        manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, callbacks)
        await manager.wait_idle()
        return manager

    manager = asyncio.run(scenario())

    assert len(callbacks.deliveries) == 1
    loader_id, rows = callbacks.deliveries[0]
    assert loader_id == BOOK_LOADER
    assert [row["name"] for row in rows] == ["Dune"]
    assert manager.get_rows(BOOK_LOADER) == rows

def test_mutation_triggers_reload(provider, dune_values):
    presenter = BookListPresenter(provider, notifier=None, currency_symbol="$")

    async def scenario():
        manager = LoaderManager(provider)
        manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, presenter)
        await manager.wait_idle()
        assert presenter.is_empty

        provider.insert(BookEntry.CONTENT_URI, dune_values)
        await manager.wait_idle()
        assert [item.name for item in presenter.items] == ["Dune"]

        presenter.sell(0)
        await manager.wait_idle()
        assert presenter.item_at(0).quantity_text == "2"
        manager.destroy()

    asyncio.run(scenario())

def test_restart_discards_older_generation(provider, dune_values):
    provider.insert(BookEntry.CONTENT_URI, dune_values)
    callbacks = RecordingCallbacks()

    async def scenario():
        manager = LoaderManager(provider)
        manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, callbacks)
        manager.restart_loader(BOOK_LOADER)
        manager.restart_loader(BOOK_LOADER)
        await manager.wait_idle()

    asyncio.run(scenario())

    assert len(callbacks.deliveries) == 1

def test_destroy_discards_late_results(provider, dune_values):
    provider.insert(BookEntry.CONTENT_URI, dune_values)
    callbacks = RecordingCallbacks()

    async def scenario():
        manager = LoaderManager(provider)
        task = manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, callbacks)
        manager.destroy()
        await asyncio.gather(task, return_exceptions=True)
        provider.insert(BookEntry.CONTENT_URI, dune_values)
        await manager.wait_idle()
        return manager

    manager = asyncio.run(scenario())

    assert callbacks.deliveries == []
    assert callbacks.resets == [BOOK_LOADER]
    assert not manager.has_loader(BOOK_LOADER)
    assert provider.observers.observers_for(BookEntry.CONTENT_URI) == []

def test_destroyed_manager_refuses_new_loaders(provider):
    async def scenario():
        manager = LoaderManager(provider)
        manager.destroy()
        with pytest.raises(RuntimeError):
            manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, RecordingCallbacks())

    asyncio.run(scenario())

def test_init_loader_twice_reuses_loader(provider):
    callbacks = RecordingCallbacks()

    async def scenario():
        manager = LoaderManager(provider)
        first = manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, callbacks)
        second = manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, callbacks)
        await manager.wait_idle()
        return first is second

    assert asyncio.run(scenario()) is True
    assert len(callbacks.deliveries) == 1

def test_editor_loads_through_loader(provider, notifier, dune_values):
    new_uri = provider.insert(BookEntry.CONTENT_URI, dune_values)
    editor = BookEditor(provider, notifier, book_uri=new_uri)

    async def scenario():
        manager = LoaderManager(provider)
        manager.init_loader(BOOK_LOADER, new_uri, editor, projection=BookEntry.ALL_COLUMNS)
        await manager.wait_idle()
        manager.destroy()

    asyncio.run(scenario())

    assert editor.quantity == 3
    # Teardown resets the form fields.
    assert editor.fields["name"] == ""

def test_query_failure_is_not_delivered(provider):
    callbacks = RecordingCallbacks()

    async def scenario():
        manager = LoaderManager(provider)
        task = manager.init_loader(
            BOOK_LOADER, BookEntry.CONTENT_URI, callbacks, projection=["isbn"]
        )
        with pytest.raises(ValueError):
            await task

    asyncio.run(scenario())

    assert callbacks.deliveries == []

def test_unawaited_failure_is_not_reported_as_unretrieved(provider):
    callbacks = RecordingCallbacks()

    async def scenario():
        reported = []
        asyncio.get_running_loop().set_exception_handler(
            lambda loop, context: reported.append(context.get("message", ""))
        )
        manager = LoaderManager(provider)
        manager.init_loader(BOOK_LOADER, BookEntry.CONTENT_URI, callbacks, projection=["isbn"])
        await manager.wait_idle()
        manager.destroy()
        del manager
        gc.collect()
        await asyncio.sleep(0)
        return reported

    reported = asyncio.run(scenario())

    assert [message for message in reported if "never retrieved" in message] == []
    assert callbacks.deliveries == []

def test_load_once_delivers_and_unregisters(provider, dune_values):
    provider.insert(BookEntry.CONTENT_URI, dune_values)
    presenter = BookListPresenter(provider, notifier=None, currency_symbol="$")

    rows = load_once(provider, BookEntry.CONTENT_URI, presenter, sort_order="id ASC")

    assert [row["name"] for row in rows] == ["Dune"]
    # The presenter keeps its rows after teardown.
    assert [item.name for item in presenter.items] == ["Dune"]
    assert provider.observers.observers_for(BookEntry.CONTENT_URI) == []

def test_load_once_propagates_query_errors(provider):
    with pytest.raises(ValueError):
        load_once(provider, BookEntry.CONTENT_URI, RecordingCallbacks(), projection=["isbn"])
