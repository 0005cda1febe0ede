#!/usr/bin/env python3
"""
Admin Bootstrap Script

Creates tables if needed and an ADMIN account. Admins cannot
self-register through the API.

Usage: python scripts/create_admin.py <email> <password> [name]
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import select

from placement_portal.core.auth import hash_password
from placement_portal.db.database import get_db_session, init_db
from placement_portal.models import Role, User


def main():
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)

    email, password = sys.argv[1].lower(), sys.argv[2]
    name = sys.argv[3] if len(sys.argv) > 3 else "Placement Admin"

    init_db()
    with get_db_session() as db:
        if db.scalar(select(User.id).where(User.email == email)) is not None:
            print(f"❌ {email} is already registered")
            sys.exit(1)

        db.add(User(name=name, email=email, password_hash=hash_password(password), role=Role.ADMIN.value))

    print(f"✅ Admin {email} created")


if __name__ == "__main__":
    main()
