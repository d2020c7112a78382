"""Database module for DocAnalyzer."""

from .migrations import Migration, MigrationManager, initialize_migrations
from .models import Database, get_database
from .schema import KeyValue, SchemaVersion
from .store import DEFAULT_COLLECTION_KEY, DocumentStore

__all__ = [
    # Tables
    "KeyValue",
    "SchemaVersion",
    # Database
    "Database",
    "get_database",
    # Document collection
    "DocumentStore",
    "DEFAULT_COLLECTION_KEY",
    # Migrations
    "Migration",
    "MigrationManager",
    "initialize_migrations",
]
