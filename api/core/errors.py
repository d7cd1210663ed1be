"""
Error types shared across features.

"Not found" is deliberately absent: lookups return None and routers turn
that into a 404.
"""

from __future__ import annotations


class ConfigError(RuntimeError):
    pass


# Storage failures are explicit and separable from SQL errors.
class StorageUnavailable(RuntimeError):
    pass


class ConstraintViolation(RuntimeError):
    pass
