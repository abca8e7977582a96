"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (settings, DB
pools, error envelope, logging, rate limiting, text normalization). Keep
feature-specific SQL and business logic in the corresponding feature package
(e.g. `clientes/`).
"""
