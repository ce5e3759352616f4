# tests/ui/test_book_list.py
import pytest

from libroinventario.core import messages
from libroinventario.crud import list_books
from libroinventario.data.contract import BookEntry, parse_id
from libroinventario.ui.book_list import BookListPresenter, format_price

@pytest.fixture
def presenter(provider, notifier):
    return BookListPresenter(provider, notifier, currency_symbol="$")

def _stored_quantity(provider, uri):
    with provider.query(uri, projection=["quantity"]) as cursor:
        return next(cursor)["quantity"]

def test_bind_renders_name_price_and_quantity(provider, presenter, dune_values):
    new_uri = provider.insert(BookEntry.CONTENT_URI, dune_values)

    with provider.query(BookEntry.CONTENT_URI) as cursor:
        items = presenter.swap_rows(cursor)

    assert len(items) == 1
    item = items[0]
    assert item.name == "Dune"
    assert item.price_text == "$9.99"
    assert item.quantity_text == "3"
    assert item.uri == new_uri
    assert item.book_id == parse_id(new_uri)

def test_format_price_uses_two_decimals():
    assert format_price(5, "€") == "€5.00"
    assert format_price(12.5) == "$12.50"

def test_swap_none_clears_items(provider, presenter, dune_values):
    provider.insert(BookEntry.CONTENT_URI, dune_values)
    presenter.swap_rows(list_books(provider))

    presenter.on_loader_reset(0)

    assert presenter.is_empty
    assert len(presenter) == 0

def test_sale_decrements_quantity(provider, presenter, notifier, dune_values):
    new_uri = provider.insert(BookEntry.CONTENT_URI, dune_values)
    presenter.swap_rows(list_books(provider))

    assert presenter.sell(0) is True

    assert presenter.item_at(0).quantity_text == "2"
    assert _stored_quantity(provider, new_uri) == 2
    assert notifier.messages == []

def test_sale_at_zero_is_sold_out(provider, presenter, notifier, dune_values):
    dune_values[BookEntry.COLUMN_BOOK_QUANTITY] = 0
    new_uri = provider.insert(BookEntry.CONTENT_URI, dune_values)
    presenter.swap_rows(list_books(provider))
    changes = []
    provider.register_observer(BookEntry.CONTENT_URI, changes.append)

    assert presenter.sell(0) is False

    assert notifier.messages == [messages.SOLD_OUT]
    assert presenter.item_at(0).quantity_text == "0"
    assert _stored_quantity(provider, new_uri) == 0
    assert changes == []

def test_dune_scenario(provider, presenter, notifier, dune_values):
    """Three sales empty the stock; the fourth reports sold out."""
    new_uri = provider.insert(BookEntry.CONTENT_URI, dune_values)
    presenter.swap_rows(list_books(provider))
    assert presenter.item_at(0).quantity_text == "3"

    presenter.sell(0)
    presenter.sell(0)
    assert _stored_quantity(provider, new_uri) == 1

    presenter.sell(0)
    assert _stored_quantity(provider, new_uri) == 0

    assert presenter.sell(0) is False
    assert notifier.messages == [messages.SOLD_OUT]
    assert _stored_quantity(provider, new_uri) == 0

def test_sale_uses_uri_captured_at_bind_time(provider, presenter, dune_values):
    """Deleting another row after binding does not redirect the sale."""
    first = provider.insert(BookEntry.CONTENT_URI, dune_values)
    second = provider.insert(BookEntry.CONTENT_URI, {**dune_values, "name": "Emma", "quantity": 5})
    presenter.swap_rows(list_books(provider))

    provider.delete(first)
    presenter.sell(1)

    assert _stored_quantity(provider, second) == 4

def test_sell_book_by_id(provider, presenter, dune_values):
    new_uri = provider.insert(BookEntry.CONTENT_URI, dune_values)
    presenter.swap_rows(list_books(provider))

    assert presenter.sell_book(parse_id(new_uri)) is True
    with pytest.raises(ValueError):
        presenter.sell_book(12345)
