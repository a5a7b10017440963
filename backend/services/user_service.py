# backend/services/user_service.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from database import atomic
from models.cart import Cart
from models.users import User
from utils.errors import Conflict, Forbidden, NotFound, Unauthorized, ValidationFailed
from utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)

USER_FIELDS = ("name", "email", "is_admin", "is_active")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserService:
    """Accounts: registration, login and admin management. Every user gets a cart."""

    def __init__(self, db: Session):
        self.db = db

    def _by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(func.lower(User.email) == normalize_email(email))).first()

    def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        existing = self._by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise Conflict("Email already registered")

    def list_users(self) -> List[User]:
        return list(self.db.scalars(select(User).order_by(User.id)))

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        is_admin: Optional[bool] = None,
        is_active: bool = True,
    ) -> User:
        """
        Create the account and its cart together.
        ``is_admin=None`` (self-registration) makes only the very first user an admin.
        """
        if not (name or "").strip() or not (email or "").strip() or not password:
            raise ValidationFailed("Name, email and password are required")
        self._ensure_email_free(email)

        if is_admin is None:
            is_admin = self.db.scalar(select(func.count(User.id))) == 0

        with atomic(self.db):
            user = User(
                name=name.strip(),
                email=normalize_email(email),
                password_hash=get_password_hash(password),
                is_admin=is_admin,
                is_active=is_active,
            )
            user.cart = Cart()
            self.db.add(user)

        self.db.refresh(user)
        logger.info("Created user %s (%s) admin=%s", user.id, user.email, user.is_admin)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self._by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise Unauthorized("Invalid credentials")
        if not user.is_active:
            raise Forbidden("Account is inactive")
        return user

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> User:
        changes = {k: v for k, v in changes.items() if k in USER_FIELDS and v is not None}

        with atomic(self.db):
            user = self.get_user(user_id)
            if "email" in changes:
                changes["email"] = normalize_email(changes["email"])
                self._ensure_email_free(changes["email"], exclude_id=user.id)
            if "name" in changes and not changes["name"].strip():
                raise ValidationFailed("Name cannot be empty")
            for key, value in changes.items():
                setattr(user, key, value)

        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int, acting_user_id: Optional[int] = None) -> None:
        if acting_user_id is not None and user_id == acting_user_id:
            raise ValidationFailed("You cannot delete your own account")

        # The cart and its items go with the user
        with atomic(self.db):
            user = self.get_user(user_id)
            self.db.delete(user)
        logger.info("Deleted user %s", user_id)
