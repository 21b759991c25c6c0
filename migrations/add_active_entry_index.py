"""
Migration: Enforce one active time entry per user

Adds the signature columns to time_entries if they are missing and creates
the partial unique index uq_time_entries_active_user on databases created
before the index was part of the model. Aborts if any user already has
more than one active entry; those must be resolved by hand first.
"""

import sys
import os
from datetime import datetime, timezone

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy import create_engine, text, inspect

from timeclock.fastapi.core.config import get_settings

settings = get_settings(os.environ.get("ENV_MODE", "dev"))
DATABASE_URL = settings.DB_URL

INDEX_NAME = "uq_time_entries_active_user"
SIGNATURE_COLUMNS = ("employee_signature", "supervisor_signature")


def find_duplicate_active_entries(connection):
    """Return (user_id, count) rows for users with several active entries."""
    return connection.execute(text("""
        SELECT user_id, COUNT(*) AS active_count
        FROM time_entries
        WHERE status = 'active'
        GROUP BY user_id
        HAVING COUNT(*) > 1
    """)).fetchall()


def run_migration():
    """Add signature columns and the active-entry unique index."""
    print(f"Starting active entry index migration at {datetime.now(timezone.utc)}")

    engine = create_engine(DATABASE_URL)

    with engine.connect() as connection:
        inspector = inspect(engine)

        columns = {col['name'] for col in inspector.get_columns('time_entries')}
        for column in SIGNATURE_COLUMNS:
            if column not in columns:
                print(f"Adding {column} column to time_entries table...")
                connection.execute(text(f"ALTER TABLE time_entries ADD COLUMN {column} TEXT"))
                connection.commit()
                print(f"✓ Added {column}")
            else:
                print(f"⊘ {column} column already exists")

        indexes = {index['name'] for index in inspector.get_indexes('time_entries')}
        if INDEX_NAME in indexes:
            print(f"⊘ {INDEX_NAME} already exists")
        else:
            duplicates = find_duplicate_active_entries(connection)
            if duplicates:
                for user_id, active_count in duplicates:
                    print(f"✗ User {user_id} has {active_count} active entries")
                raise RuntimeError("Resolve duplicate active entries before creating the index")

            print(f"Creating {INDEX_NAME}...")
            connection.execute(text(f"""
                CREATE UNIQUE INDEX {INDEX_NAME}
                ON time_entries (user_id)
                WHERE status = 'active'
            """))
            connection.commit()
            print(f"✓ Created {INDEX_NAME}")

    print("\n" + "="*50)
    print("Migration completed successfully!")
    print("="*50)


def rollback_migration():
    """Drop the active-entry unique index (signature columns are kept)."""
    print(f"Starting rollback at {datetime.now(timezone.utc)}")

    engine = create_engine(DATABASE_URL)

    with engine.connect() as connection:
        connection.execute(text(f"DROP INDEX IF EXISTS {INDEX_NAME}"))
        connection.commit()
        print(f"✓ Dropped {INDEX_NAME}")

    print("Rollback completed successfully!")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Enforce one active time entry per user")
    parser.add_argument(
        "--rollback",
        action="store_true",
        help="Rollback the migration (drop the unique index)"
    )

    args = parser.parse_args()

    try:
        if args.rollback:
            rollback_migration()
        else:
            run_migration()
    except Exception as e:
        print(f"\n❌ Migration failed: {e}")
        raise
