"""
Create an administrator account and print a bearer token for it.

Usage: python create_admin.py <email> [first_name] [last_name]

Tables are created if needed. If the email already belongs to a user, that
user is promoted to administrator instead.
"""

import sys
import os
from datetime import timedelta

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from timeclock.fastapi.dependencies.database import SessionLocal, init_db
from timeclock.fastapi.crud.user import UserCRUD
from timeclock.fastapi.schemas.user import UserCreate
from timeclock.security.auth import create_user_token


def create_admin_account(email, first_name="System", last_name="Administrator"):
    """Create or promote the admin and return it."""
    init_db()
    db = SessionLocal()

    try:
        crud = UserCRUD(db)
        admin = crud.get_user_by_email(email)
        if admin:
            admin.is_admin = True
            admin.is_active = True
            db.commit()
            db.refresh(admin)
            print(f"✅ Promoted existing user to admin: {admin.email}")
        else:
            admin = crud.create_user(UserCreate(
                first_name=first_name,
                last_name=last_name,
                email=email,
                is_admin=True,
                is_active=True
            ))
            print(f"✅ Created admin user: {admin.email}")

        print(f"   ID: {admin.id}")
        return admin
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__.strip())
        sys.exit(1)

    admin = create_admin_account(*sys.argv[1:4])
    token = create_user_token(str(admin.id), is_admin=True, expires_delta=timedelta(days=1))

    print(f"\n🔑 Bearer token (valid 24h):\n{token}")
    print(f"\n🚀 Try: GET http://localhost:8000/api/analytics/system-stats")
