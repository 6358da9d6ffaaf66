"""
Initialize database — creates the cars and idempotency_keys tables.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import Database
from app.config import settings
from sqlalchemy import inspect


def main():
    print("🗄️  CMTracker DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    database = Database()
    try:
        if not database.check_connection():
            print("❌ Cannot connect to database")
            print("\nMake sure PostgreSQL is running and the database exists:")
            print("  createdb -U postgres Car")
            print("  # or: sudo systemctl start postgresql")
            sys.exit(1)
        print("✅ Database connection OK")

        print("\n📋 Creating tables...")
        database.create_tables()

        tables = sorted(inspect(database.engine).get_table_names())
        print(f"\n📊 Tables in database ({len(tables)} total):")
        for t in tables:
            print(f"   ✓ {t}")
    finally:
        database.dispose()

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
