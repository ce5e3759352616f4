from .book_provider import BookProvider
from .cursor import BookCursor
from .observers import ContentObservers
from .uri_matcher import BOOK_ID, BOOKS, NO_MATCH, UriMatcher, build_book_matcher

__all__ = [
    "BookProvider",
    "BookCursor",
    "ContentObservers",
    "UriMatcher",
    "build_book_matcher",
    "BOOKS",
    "BOOK_ID",
    "NO_MATCH",
]
