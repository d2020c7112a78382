"""Simple migration system for database schema updates."""

from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from ..utils.logging import get_logger
from .models import Database
from .schema import KeyValue, SchemaVersion

logger = get_logger(__name__)


class Migration:
    """Represents a single database migration."""

    def __init__(
        self,
        version: int,
        description: str,
        up: Callable[[Session], None],
    ):
        self.version = version
        self.description = description
        self.up = up


class MigrationManager:
    """Applies pending migrations in version order."""

    def __init__(self, db: Database):
        self.db = db
        self.migrations: List[Migration] = []

    def register(self, migration: Migration):
        """Register a migration."""
        self.migrations.append(migration)
        self.migrations.sort(key=lambda m: m.version)

    def get_current_version(self, session: Session) -> int:
        """Current schema version (0 if no migrations applied)."""
        latest = session.query(SchemaVersion).order_by(SchemaVersion.version.desc()).first()
        return latest.version if latest else 0

    def apply_migrations(self, target_version: Optional[int] = None) -> int:
        """
        Apply pending migrations.

        Args:
            target_version: Target version to migrate to (None = latest)

        Returns:
            Number of migrations applied
        """
        SchemaVersion.__table__.create(bind=self.db.engine, checkfirst=True)
        session = self.db.get_session()

        try:
            current_version = self.get_current_version(session)
            logger.info(f"Current database version: {current_version}")

            if target_version is None:
                target_version = self.migrations[-1].version if self.migrations else 0

            pending_migrations = [
                m for m in self.migrations if current_version < m.version <= target_version
            ]

            if not pending_migrations:
                logger.info("No pending migrations")
                return 0

            for migration in pending_migrations:
                logger.info(f"Applying migration {migration.version}: {migration.description}")

                try:
                    migration.up(session)
                    session.add(
                        SchemaVersion(
                            version=migration.version,
                            description=migration.description,
                            applied_at=datetime.utcnow(),
                        )
                    )
                    session.commit()
                except Exception as e:
                    logger.error(f"Failed to apply migration {migration.version}: {e}")
                    session.rollback()
                    raise

            return len(pending_migrations)

        finally:
            session.close()


def create_document_store(session: Session):
    """Migration 1: create the key-value table holding the document collection."""
    KeyValue.__table__.create(bind=session.connection(), checkfirst=True)


def get_default_migrations() -> List[Migration]:
    """Get list of default migrations."""
    return [
        Migration(version=1, description="Create key-value document store", up=create_document_store),
    ]


def initialize_migrations(db: Database) -> MigrationManager:
    """Create a migration manager with the default migrations registered."""
    manager = MigrationManager(db)
    for migration in get_default_migrations():
        manager.register(migration)
    return manager
