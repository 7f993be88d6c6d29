"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (DB wiring,
environment settings, logging, error responses). Keep item-specific SQL and
business logic in `items/`.
"""
