"""
Modelo ORM para la entidad Book en la base de datos de LibroInventario.
Define las columnas de la única tabla del inventario.
"""

from sqlalchemy import Column, Integer, String, Float, CheckConstraint
from libroinventario.data.contract import BookEntry
from libroinventario.db.session import Base

class Book(Base):
    """
    Representa un libro del inventario.

    Atributos:
        id (int): Identificador primario del libro, asignado por la base de datos.
        name (str): Título del libro.
        author (str): Autor; 'Anonymous' si no se indica al insertar.
        price (float): Precio de venta.
        quantity (int): Unidades en stock, nunca negativas.
        supplier (str): Nombre del proveedor.
        supplier_phone (str): Teléfono del proveedor.
    """
    __tablename__ = BookEntry.TABLE_NAME

    id = Column(BookEntry._ID, Integer, primary_key=True, autoincrement=True)
    name = Column(BookEntry.COLUMN_BOOK_NAME, String, nullable=False)
    author = Column(
        BookEntry.COLUMN_AUTHOR_NAME,
        String,
        nullable=False,
        server_default=BookEntry.DEFAULT_AUTHOR,
    )
    price = Column(BookEntry.COLUMN_BOOK_PRICE, Float, nullable=False)
    quantity = Column(BookEntry.COLUMN_BOOK_QUANTITY, Integer, nullable=False)
    supplier = Column(BookEntry.COLUMN_BOOK_SUPPLIER, String, nullable=True)
    supplier_phone = Column(BookEntry.COLUMN_BOOK_SUPPLIER_PHONE, String, nullable=True)

    __table_args__ = (
        CheckConstraint('quantity >= 0', name='book_quantity_non_negative'),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """
        Representación legible del objeto Book para depuración.

        Returns:
            str: Cadena representando el libro.
        """
        return f"<Book(id={self.id}, name='{self.name[:30]}...', quantity={self.quantity})>"
