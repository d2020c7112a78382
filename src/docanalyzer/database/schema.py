"""SQLite database schema for DocAnalyzer."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValue(Base):
    """Named JSON blobs, written wholesale."""

    __tablename__ = "key_values"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<KeyValue(key='{self.key}', size={len(self.value or '')})>"


class SchemaVersion(Base):
    """Schema version tracking for migrations."""

    __tablename__ = "schema_version"

    version = Column(Integer, primary_key=True)
    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    description = Column(String(255))

    def __repr__(self):
        return f"<SchemaVersion(version={self.version}, applied_at={self.applied_at})>"
