"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks the feature packages use (DB wiring,
settings, logging, the storage error kinds). Feature-specific SQL and
business logic live in the feature package (e.g. `coordinates/`).
"""
