"""Create the engine's tables directly, for local development without Alembic."""

from duk_scoring.db.session import create_tables

if __name__ == "__main__":
    create_tables()
    print("Database initialized.")
