"""
Password hashing and account use-cases
"""
import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from timekeeper.domain.errors import ConflictError, InvalidInputError
from timekeeper.infrastructure.db.models import User

logger = logging.getLogger(__name__)

# pbkdf2_sha256: pure python, no native deps
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


class RegisterUserUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, email: str, password: str) -> int:
        email = normalize_email(email)
        if "@" not in email:
            raise InvalidInputError("Invalid email")
        if not password:
            raise InvalidInputError("Password must not be empty")
        if get_user_by_email(self.db, email):
            raise ConflictError(f"User already exists: {email}")

        user = User(email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User already exists: {email}") from None

        logger.info("Registered user id=%d", user.id)
        return user.id


def login_user(db: Session, email: str, password: str) -> User | None:
    """Return the user when the credentials are valid, None otherwise."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
