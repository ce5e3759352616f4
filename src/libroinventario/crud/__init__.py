from .crud_book import (
    DUMMY_BOOK,
    LIST_PROJECTION,
    delete_all_books,
    get_book,
    insert_dummy_book,
    list_books,
)

__all__ = [
    "DUMMY_BOOK",
    "LIST_PROJECTION",
    "delete_all_books",
    "get_book",
    "insert_dummy_book",
    "list_books",
]
