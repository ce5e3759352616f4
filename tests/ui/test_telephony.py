# tests/ui/test_telephony.py
import pytest

from libroinventario.core import messages
from libroinventario.data.contract import BookEntry
from libroinventario.ui.editor import BookEditor
from libroinventario.ui.telephony import SupplierDialer

class FakePlatform:
    def __init__(self, permitted):
        self.permitted = permitted
        self.permission_requests = 0
        self.dialed = []

    def has_call_permission(self):
        return self.permitted

    def request_call_permission(self):
        self.permission_requests += 1

    def dial(self, uri):
        self.dialed.append(uri)

def test_dial_with_permission(notifier):
    platform = FakePlatform(permitted=True)
    dialer = SupplierDialer(platform, notifier)

    assert dialer.call(" 555-1234 ") is True
    assert platform.dialed == ["tel:555-1234"]

def test_empty_number_is_ignored(notifier):
    platform = FakePlatform(permitted=True)
    dialer = SupplierDialer(platform, notifier)

    assert dialer.call("  ") is False
    assert dialer.call(None) is False
    assert platform.dialed == []
    assert platform.permission_requests == 0

def test_missing_permission_is_requested_then_dials(notifier):
    platform = FakePlatform(permitted=False)
    dialer = SupplierDialer(platform, notifier)

    assert dialer.call("555-1234") is False
    assert platform.permission_requests == 1
    assert platform.dialed == []

    platform.permitted = True
    assert dialer.on_permission_result(True) is True
    assert platform.dialed == ["tel:555-1234"]

def test_permission_denied_notifies_without_retry(notifier):
    platform = FakePlatform(permitted=False)
    dialer = SupplierDialer(platform, notifier)
    dialer.call("555-1234")

    assert dialer.on_permission_result(False) is False

    assert notifier.messages == [messages.PERMISSION_DENIED]
    assert platform.permission_requests == 1
    assert platform.dialed == []

@pytest.mark.parametrize("with_uri", [True, False])
def test_editor_order_more_only_when_editing(provider, notifier, dune_values, with_uri):
    platform = FakePlatform(permitted=True)
    book_uri = provider.insert(BookEntry.CONTENT_URI, dune_values) if with_uri else None
    editor = BookEditor(provider, notifier, book_uri=book_uri, dialer=SupplierDialer(platform, notifier))
    editor.load()
    editor.fields["supplier_phone"] = editor.fields["supplier_phone"] or "555-0000"

    assert editor.order_more() is with_uri
    assert platform.dialed == (["tel:555-1234"] if with_uri else [])
