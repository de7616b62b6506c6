"""Authentication service layer."""

from __future__ import annotations

import re
from typing import Optional

from flask_jwt_extended import create_access_token, create_refresh_token
from sqlalchemy import func

from myarc.core.auth.schemas import RegisterRequest
from myarc.core.users.models import User
from myarc.extensions import bcrypt, db

PIN_RE = re.compile(r"^\d{4}$")


def hash_secret(secret: str) -> str:
    """bcrypt hash for passwords and privacy PINs alike."""
    return bcrypt.generate_password_hash(secret).decode("utf-8")


def verify_secret(secret: str, hashed: str) -> bool:
    return bcrypt.check_password_hash(hashed, secret)


def register_user(payload: RegisterRequest) -> User:
    """Create a credentials-backed user."""
    normalized_email = payload.email.strip().lower()
    existing = User.query.filter(func.lower(User.email) == normalized_email).first()
    if existing:
        raise ValueError("email_already_exists")

    user = User(
        email=normalized_email,
        name=payload.name,
        password_hash=hash_secret(payload.password),
        auth_provider="credentials",
    )
    db.session.add(user)
    db.session.commit()
    return user


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = User.query.filter(func.lower(User.email) == (email or "").strip().lower()).first()
    if not user or not user.password_hash:
        return None
    if not verify_secret(password, user.password_hash):
        return None
    return user


def issue_tokens(user: User) -> dict[str, str]:
    """Create access and refresh tokens for a user."""
    identity = str(user.id)
    return {
        "access_token": create_access_token(identity=identity, additional_claims={"email": user.email}),
        "refresh_token": create_refresh_token(identity=identity),
    }


def set_privacy_pin(user: User, pin: str) -> User:
    if not PIN_RE.match(pin or ""):
        raise ValueError("validation_error")
    user.privacy_pin_hash = hash_secret(pin)
    db.session.commit()
    return user


def verify_privacy_pin(user: User, pin: str) -> bool:
    """Check a PIN. Raises ``ValueError`` for malformed input or when none is set."""
    if not pin or len(pin) != 4:
        raise ValueError("invalid_pin_format")
    if not user.privacy_pin_hash:
        raise ValueError("pin_not_set")
    return verify_secret(pin, user.privacy_pin_hash)
