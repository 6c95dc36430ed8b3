"""Database utilities and models."""

from shopgrowth.db.base import Base
from shopgrowth.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
