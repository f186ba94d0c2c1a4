"""
Books Router

The six conventional book routes. Book aggregations living under
/books (desired books, lending history) are served by their own
routers, which main.py registers first so /books/desired is not taken
for /books/{id}.
"""

from library_api.routers.resource import build_resource_router
from library_api.schemas.book import BookCreate, BookListQuery, BookUpdate
from library_api.services.books import book_service

router = build_resource_router(
    book_service,
    resource="book",
    create_schema=BookCreate,
    update_schema=BookUpdate,
    list_schema=BookListQuery,
    prefix="/books",
    tags=["Books"],
    public_read=True,
)
