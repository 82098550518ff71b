"""Create the exposure store tables without running migrations.

Intended for local SQLite databases; deployed databases use ``migrate``.
"""

from exposure_store.core.settings import settings
from exposure_store.db.session import create_tables


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    init_db()
    print(f"Database initialized at {settings.effective_database_url}")
