# tests/conftest.py
import pytest
from sqlalchemy.orm import sessionmaker
import os
import sys

# Add the src directory to the Python path to allow imports without an install
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
src_path = os.path.join(project_root, 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from libroinventario.data.contract import BookEntry
from libroinventario.db.session import InventoryDbHelper
from libroinventario.provider.book_provider import BookProvider


class RecordingNotifier:
    """Collects every notice shown to the user."""

    def __init__(self):
        self.messages = []

    def notify(self, message):
        self.messages.append(message)


class ScriptedConfirmer:
    """Answers confirmation dialogs with a fixed answer and records the prompts."""

    def __init__(self, answer):
        self.answer = answer
        self.prompts = []

    def confirm(self, message):
        self.prompts.append(message)
        return self.answer


# --- Test Database Setup ---
# Each test gets its own file-backed SQLite database under tmp_path
@pytest.fixture(scope="function")
def db_helper(tmp_path):
    helper = InventoryDbHelper(f"sqlite:///{tmp_path / 'inventory.db'}")
    yield helper
    helper.close()


@pytest.fixture(scope="function")
def provider(db_helper):
    return BookProvider(db_helper)


@pytest.fixture(scope="function")
def db_session(db_helper):
    """ORM session bound to the test database, for model-level tests."""
    engine = db_helper.open_or_create()
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dune_values():
    return {
        BookEntry.COLUMN_BOOK_NAME: "Dune",
        BookEntry.COLUMN_AUTHOR_NAME: "Herbert",
        BookEntry.COLUMN_BOOK_PRICE: 9.99,
        BookEntry.COLUMN_BOOK_QUANTITY: 3,
        BookEntry.COLUMN_BOOK_SUPPLIER: "Acme",
        BookEntry.COLUMN_BOOK_SUPPLIER_PHONE: "555-1234",
    }


@pytest.fixture
def make_confirmer():
    return ScriptedConfirmer
