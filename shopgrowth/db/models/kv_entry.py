"""Key/value entry ORM model backing the SQL key/value store."""
from __future__ import annotations

from sqlalchemy import Column, Text

from shopgrowth.db.base import Base
from shopgrowth.db.types import JSONBCompat, UTCDateTime


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(Text, primary_key=True)
    value = Column(JSONBCompat, nullable=True)
    updated_at = Column(UTCDateTime, nullable=False)
