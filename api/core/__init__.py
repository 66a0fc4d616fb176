"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that every entity package uses
(DB wiring, settings, logging, error translation). Keep entity-specific SQL in
the corresponding package (e.g. `artists/`).
"""
