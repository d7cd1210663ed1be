"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks features share (settings, DB pool,
logging, error types). Table-specific SQL stays in the feature package
(e.g. `blogposts/`).
"""
