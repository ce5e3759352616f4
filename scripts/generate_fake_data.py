"""
Script para generación de datos falsos en la base de datos de LibroInventario.

Este módulo crea libros de prueba utilizando Faker y el proveedor de libros del
proyecto. Está pensado para poblar entornos de desarrollo o pruebas con un
inventario realista y variado.

Uso:
    Ejecutar directamente este script para poblar la base de datos configurada
    en DATABASE_URL. El número de libros se toma de SEED_BOOKS o del argumento
    --count.

Nota:
    - Algunos libros se crean sin autor para que la base de datos aplique el
      valor por defecto 'Anonymous'.
    - Algunos libros se crean con cantidad 0 para probar la venta de libros agotados.
"""

import argparse
import random
import logging
import sys
from faker import Faker
from typing import Any, Dict, List, Optional

try:
    from libroinventario.core.config import settings
    from libroinventario.data.contract import BookEntry
    from libroinventario.db.session import get_db_helper
    from libroinventario.provider.book_provider import BookProvider
except ImportError as e:
    print(f"Error importando módulos: {e}. Asegúrate de haber ejecutado 'pip install -e .'")
    sys.exit(1)

logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

fake = Faker(['es_ES', 'en_US'])

def fake_book(faker: Faker) -> Dict[str, Any]:
    """
    Genera los valores de un libro aleatorio.

    Args:
        faker (Faker): Instancia de Faker a utilizar.

    Returns:
        Dict[str, Any]: Valores por columna para `BookProvider.insert`.
    """
    values: Dict[str, Any] = {
        BookEntry.COLUMN_BOOK_NAME: faker.sentence(nb_words=random.randint(1, 4)).rstrip("."),
        BookEntry.COLUMN_BOOK_PRICE: round(random.uniform(2.5, 60.0), 2),
        BookEntry.COLUMN_BOOK_QUANTITY: random.choice([0, 1, 2, 5, 10, 25]),
        BookEntry.COLUMN_BOOK_SUPPLIER: faker.company(),
        BookEntry.COLUMN_BOOK_SUPPLIER_PHONE: faker.phone_number(),
    }
    if random.random() < 0.85:
        values[BookEntry.COLUMN_AUTHOR_NAME] = faker.name()
    return values

def generate_data(provider: BookProvider, count: int) -> List[str]:
    """
    Inserta `count` libros falsos a través del proveedor.

    Returns:
        List[str]: URIs de los libros creados.
    """
    created: List[str] = []
    logger.info(f"--- Generando {count} libros falsos ---")
    for i in range(count):
        new_uri: Optional[str] = provider.insert(BookEntry.CONTENT_URI, fake_book(fake))
        if new_uri is None:
            logger.warning(f"  ({i+1}/{count}) No se pudo insertar el libro.")
            continue
        created.append(new_uri)
        logger.info(f"  ({i+1}/{count}) Libro creado: {new_uri}")
    logger.info(f"--- Total libros falsos añadidos: {len(created)} ---")
    return created

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Populate the inventory with fake books.")
    parser.add_argument("--count", type=int, default=settings.SEED_BOOKS, help="Number of books to create")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args(argv)

    if args.seed is not None:
        random.seed(args.seed)
        Faker.seed(args.seed)

    db_helper = get_db_helper()
    try:
        generate_data(BookProvider(db_helper), args.count)
    finally:
        db_helper.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
