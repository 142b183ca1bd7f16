"""
Create test user
Run:  python create_test_user.py
"""
from timekeeper.infrastructure.db.session import get_db, init_db
from timekeeper.auth import RegisterUserUseCase, get_user_by_email

EMAIL = "test@example.com"
PASSWORD = "password123"

init_db()
db = next(get_db())

existing = get_user_by_email(db, EMAIL)
if existing:
    print(f"User already exists: {EMAIL} (ID: {existing.id})")
else:
    RegisterUserUseCase(db).execute(EMAIL, PASSWORD)
    print("Created user:")
    print(f"  Email: {EMAIL}")
    print(f"  Password: {PASSWORD}")

db.close()
