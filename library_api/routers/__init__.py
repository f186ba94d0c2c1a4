"""
API Routers Package

FastAPI routers that handle the API endpoints, one module per area:

- resource.py: build_resource_router(), the six conventional CRUD routes
- books.py: /books
- catalog.py: /subjects, /publications, /writers, /translators,
  /pronouns, /faqs
- access.py: /permissions, /roles
- auth.py: /auth (signup, login, refresh)
- users.py: /users/me, favourites, recently visited
- lending.py: /lend, /return, lent books and history
- book_requests.py: book requests and desired books
- trending.py: /trending
- site.py: /site/<document>
- status.py: /status

Each router is imported and registered in main.py.
"""

from library_api.routers.access import permissions_router, roles_router
from library_api.routers.auth import router as auth_router
from library_api.routers.book_requests import router as book_requests_router
from library_api.routers.books import router as books_router
from library_api.routers.catalog import (
    faqs_router,
    pronouns_router,
    publications_router,
    subjects_router,
    translators_router,
    writers_router,
)
from library_api.routers.lending import router as lending_router
from library_api.routers.site import router as site_router
from library_api.routers.status import router as status_router
from library_api.routers.trending import router as trending_router
from library_api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "book_requests_router",
    "books_router",
    "faqs_router",
    "lending_router",
    "permissions_router",
    "pronouns_router",
    "publications_router",
    "roles_router",
    "site_router",
    "status_router",
    "subjects_router",
    "translators_router",
    "trending_router",
    "users_router",
    "writers_router",
]
