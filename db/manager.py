"""Database manager for SQLite connections and schema migrations."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Set
from config import Config, get_migrations_dir
from logger import get_logger

logger = get_logger()


class DatabaseManager:
    """Manages database connections and paths.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection with foreign keys enforced.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self) -> Path:
        return self.config.db_path

    def get_migrations_dir(self) -> Path:
        return get_migrations_dir()


class Migrator:
    """Applies the ordered .sql files in the migrations directory.

    Applied files are recorded in a schema_migrations table so each one runs
    exactly once per database.

    Args:
        migrations_dir: Directory holding NNN_name.sql files.
    """

    def __init__(self, migrations_dir: Path):
        self.migrations_dir = migrations_dir

    def available(self) -> List[str]:
        """Migration file names, in the order they must be applied."""
        if not self.migrations_dir.exists():
            return []
        return sorted(path.name for path in self.migrations_dir.glob("*.sql"))

    def applied(self, conn: sqlite3.Connection) -> Set[str]:
        self._ensure_table(conn)
        cursor = conn.execute("SELECT migration_file FROM schema_migrations")
        return {row[0] for row in cursor.fetchall()}

    def pending(self, conn: sqlite3.Connection) -> List[str]:
        applied = self.applied(conn)
        return [name for name in self.available() if name not in applied]

    def apply_pending(self, conn: sqlite3.Connection) -> List[str]:
        """Apply every pending migration.

        Args:
            conn: Open SQLite connection.

        Returns:
            Names of the migrations that were applied.

        Raises:
            sqlite3.Error: If a migration fails. The failing migration is
                rolled back and not recorded.
        """
        pending = self.pending(conn)
        for name in pending:
            sql = (self.migrations_dir / name).read_text()
            try:
                conn.executescript(sql)
                conn.execute(
                    "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                    (name,),
                )
                conn.commit()
                logger.info(f"Applied migration: {name}")
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error applying migration {name}: {e}")
                raise
        return pending

    def _ensure_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                migration_file TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.commit()
