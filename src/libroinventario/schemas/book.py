"""
Esquemas Pydantic para la entidad Book en LibroInventario.
Define el formulario del editor (texto tal como lo escribe el usuario) y el
esquema de salida de una fila de la tabla de libros.
"""

from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from libroinventario.data.contract import BookEntry

class BookForm(BaseModel):
    """
    Campos de texto del editor, recortados de espacios al crearse.

    Atributos:
        name (str): Título del libro.
        author (str): Autor del libro.
        price (str): Precio tal como se ha escrito.
        supplier (str): Proveedor.
        supplier_phone (str): Teléfono del proveedor.
    """
    name: str = ""
    author: str = ""
    price: str = ""
    supplier: str = ""
    supplier_phone: str = ""

    model_config = ConfigDict(str_strip_whitespace=True)

    def missing_fields(self) -> List[str]:
        """Nombres de los campos obligatorios que están vacíos."""
        return [field for field, value in self.model_dump().items() if not value]

    def parsed_price(self) -> Optional[float]:
        """
        Convierte el precio a número real.

        Returns:
            Optional[float]: 0.0 si el campo está vacío, None si no es un número.
        """
        if not self.price:
            return 0.0
        try:
            return float(self.price)
        except ValueError:
            return None

    def to_values(self, quantity: int) -> dict:
        """Valores por columna listos para `BookProvider.insert/update`."""
        return {
            BookEntry.COLUMN_BOOK_NAME: self.name,
            BookEntry.COLUMN_AUTHOR_NAME: self.author,
            BookEntry.COLUMN_BOOK_PRICE: self.parsed_price() or 0.0,
            BookEntry.COLUMN_BOOK_QUANTITY: quantity,
            BookEntry.COLUMN_BOOK_SUPPLIER: self.supplier,
            BookEntry.COLUMN_BOOK_SUPPLIER_PHONE: self.supplier_phone,
        }

class BookSchema(BaseModel):
    """
    Esquema de salida para un libro leído de la base de datos.
    """
    id: int
    name: str
    author: str
    price: float
    quantity: int
    supplier: Optional[str] = None
    supplier_phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
