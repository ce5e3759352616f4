"""
Router de URIs del proveedor de contenido.

Asocia patrones `content://<authority>/<path>` a un código entero. En los
patrones, `#` acepta un segmento numérico y `*` cualquier segmento.
"""

from typing import Dict, List, Tuple
from urllib.parse import urlsplit

from libroinventario.data.contract import CONTENT_AUTHORITY, PATH_BOOKS

NO_MATCH = -1

BOOKS = 100
BOOK_ID = 101


def _segments(path: str) -> Tuple[str, ...]:
    return tuple(segment for segment in path.split("/") if segment)


class UriMatcher:
    """Resuelve una URI al código del primer patrón registrado que coincide."""

    def __init__(self, no_match: int = NO_MATCH):
        self.no_match = no_match
        self._routes: Dict[str, List[Tuple[Tuple[str, ...], int]]] = {}

    def add_uri(self, authority: str, path: str, code: int) -> None:
        """Registra un patrón de ruta. `#` casa con un entero y `*` con cualquier segmento."""
        self._routes.setdefault(authority, []).append((_segments(path), code))

    def match(self, uri: str) -> int:
        """
        Código asociado a la URI.

        Returns:
            int: Código del primer patrón que coincide, o `no_match`.
        """
        parts = urlsplit(uri)
        if parts.scheme != "content" or parts.query or parts.fragment:
            return self.no_match
        segments = _segments(parts.path)
        for pattern, code in self._routes.get(parts.netloc, []):
            if len(pattern) != len(segments):
                continue
            if all(self._segment_matches(p, s) for p, s in zip(pattern, segments)):
                return code
        return self.no_match

    @staticmethod
    def _segment_matches(pattern: str, segment: str) -> bool:
        if pattern == "#":
            return segment.isdigit()
        if pattern == "*":
            return True
        return pattern == segment


def build_book_matcher() -> UriMatcher:
    """Router con las rutas de la colección de libros y de un libro concreto."""
    matcher = UriMatcher(NO_MATCH)
    matcher.add_uri(CONTENT_AUTHORITY, PATH_BOOKS, BOOKS)
    matcher.add_uri(CONTENT_AUTHORITY, f"{PATH_BOOKS}/#", BOOK_ID)
    return matcher
