"""
Pydantic Schemas Package

Request DTOs and response models, one module per resource.

Schema Naming Convention:
- XxxCreate: body of POST /<resource>
- XxxUpdate: body of PUT /<resource>/{id}, every field optional
- XxxListQuery: query string of GET /<resource> (pagination + filters)
- XxxResponse: record returned inside the envelope's data
- XxxSummary: compact form embedded in other responses

Shared building blocks (ObjectId, RequestModel, ListQuery, Page...) are
in schemas/common.py.
"""
