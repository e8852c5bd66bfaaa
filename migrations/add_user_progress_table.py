"""
Migration: add the user_progress table (last lesson / last flashcard per user)
to databases created before progress tracking existed.
"""

import sqlite3
import os


def sqlite_path(database_url: str) -> str:
    return database_url.replace("sqlite:///", "")


def run_migration(db_path: str | None = None) -> bool:
    """Returns True when the table was created, False when it already existed."""
    db_path = db_path or sqlite_path(os.getenv("DATABASE_URL", "sqlite:///./lingua.db"))
    conn = None
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='user_progress'")
        if cursor.fetchone():
            print("user_progress table already exists. Skipping migration.")
            return False

        cursor.execute("""
            CREATE TABLE user_progress (
                user_id TEXT PRIMARY KEY,
                last_lesson_id TEXT,
                last_flashcard_id TEXT,
                updated_at TIMESTAMP NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX ix_user_progress_user_id ON user_progress(user_id)")

        conn.commit()
        print("✓ Migration add_user_progress_table completed successfully!")
        return True

    except sqlite3.Error as e:
        print(f"Error during migration: {e}")
        if conn:
            conn.rollback()
        raise
    finally:
        if conn:
            conn.close()


if __name__ == "__main__":
    run_migration()
