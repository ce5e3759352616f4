"""
Mensajes visibles para el usuario en LibroInventario.

Centraliza los textos que la lista de libros, el editor y el marcado
telefónico muestran a través del notificador o de los diálogos de confirmación.
"""

SOLD_OUT = "This book is sold out"

FILL_OUT_FIELDS = "Please fill out all the fields"
INVALID_PRICE = "Please enter a valid price"

EDITOR_INSERT_BOOK_SUCCESSFUL = "Book saved"
EDITOR_INSERT_BOOK_FAILED = "Error with saving book"
EDITOR_EDIT_BOOK_SUCCESSFUL = "Book updated"
EDITOR_EDIT_BOOK_FAILED = "Error with updating book"
EDITOR_DELETE_BOOK_SUCCESSFUL = "Book deleted"
EDITOR_DELETE_BOOK_FAILED = "Error with deleting book"

EDITOR_TITLE_ADD = "Add a Book"
EDITOR_TITLE_EDIT = "Edit Book"

UNSAVED_CHANGES_DIALOG_MSG = "Discard your changes and quit editing?"
DELETE_DIALOG_MSG = "Delete this book?"
DELETE_ALL_DIALOG_MSG = "Delete all books?"

PERMISSION_DENIED = "Permission DENIED"

EMPTY_INVENTORY_TITLE = "The inventory is empty"
EMPTY_INVENTORY_SUBTITLE = "Get started by adding a book"
