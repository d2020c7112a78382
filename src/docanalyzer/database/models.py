"""Database connection and session management."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import Base


class Database:
    """Database connection and session management."""

    def __init__(self, db_path: Path):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False},  # Needed for SQLite
        )

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all_tables(self):
        """Create all tables if they don't exist."""
        Base.metadata.create_all(bind=self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()

    def close(self):
        """Close database connection."""
        self.engine.dispose()


_database: Database | None = None


def get_database(db_path: Path | None = None) -> Database:
    """
    Get global database instance.

    Args:
        db_path: Path to database file (required on first call; a different
            path replaces the global instance)

    Returns:
        Database instance
    """
    global _database
    if db_path is not None and (_database is None or _database.db_path != Path(db_path)):
        if _database is not None:
            _database.close()
        _database = Database(db_path)
    if _database is None:
        raise ValueError("db_path must be provided on first call to get_database()")
    return _database
