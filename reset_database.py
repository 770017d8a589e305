#!/usr/bin/env python3
"""
Database reset script for Clinic Records.

This script drops every table and recreates them empty.
Use this to get a clean database state for local development.
"""

import os
import sys

# Add backend/src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'backend', 'src'))

from sqlalchemy import inspect

from core.config import DATABASE_URL
from core.database import Base, create_tables, drop_tables, engine

# Import all models to ensure they're registered with Base
import models  # noqa: F401


def reset_database() -> bool:
    """Reset the database by dropping all tables and recreating them."""

    print("🔄 Resetting Clinic Records database...")
    print(f"Database URL: {DATABASE_URL}")

    # Refuse anything that looks like a shared database
    if not any(marker in DATABASE_URL for marker in ("localhost", "127.0.0.1", "sqlite")):
        print("❌ ERROR: This script only works with a local database!")
        return False

    try:
        print("🗑️  Dropping existing tables...")
        drop_tables()
        print("🏗️  Creating fresh tables...")
        create_tables()

        table_names = inspect(engine).get_table_names()
        print("📋 Created tables:")
        for table in sorted(Base.metadata.tables):
            marker = "✅" if table in table_names else "❌"
            print(f"  {marker} {table}")
        return all(table in table_names for table in Base.metadata.tables)
    except Exception as e:
        print(f"❌ Error resetting database: {e}")
        return False


if __name__ == "__main__":
    sys.exit(0 if reset_database() else 1)
