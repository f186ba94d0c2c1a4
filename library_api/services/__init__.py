"""
Services Package

Business logic, separate from HTTP handling. Every operation returns a
ServiceResult (services/results.py) that the routers turn into the
response envelope.

Current services:
- resource.py: generic CRUD for any model (ResourceService)
- catalog.py: ResourceService instances for the simple catalogue resources
- books.py: books, with reference and subject checks
- access.py: permissions and roles, default permission catalogue
- auth.py: signup, login, token refresh and the caller's profile
- favourites.py / recently_visited.py: per-reader book lists
- lending.py: lend, return and circulation history
- book_requests.py: requests for missing titles, desired books
- trending.py: most favourited books, writers, publications, subjects
- site.py: singleton site documents
- storage.py: FileStorage interface for uploads
- rate_limiter.py: rate limiting with slowapi and Redis backend
- security.py: password hashing and JWT utilities
- status.py: service status and datastore ping
"""
