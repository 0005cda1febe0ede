#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the database connection is working.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy.engine import make_url

from placement_portal.db.database import test_database_connection
from placement_portal.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("PLACEMENT PORTAL - CONNECTION TEST")
    print("=" * 50)

    print("\n[1] Testing database...")
    print(f"    URL: {make_url(settings.sqlalchemy_url).render_as_string(hide_password=True)}")
    if test_database_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
