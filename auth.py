from datetime import timedelta
from typing import Optional

import bcrypt
import jwt
import structlog

import settings
from database import now
from errors import AuthenticationError, NotFoundError, ValidationError
from schemas import User
from store import Store

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode(), password_hash.encode())


def create_token(user: User) -> str:
    payload = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "exp": now() + timedelta(days=settings.JWT_EXPIRE_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def token_from_headers(authorization: Optional[str], x_auth_token: Optional[str]) -> Optional[str]:
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return x_auth_token or None


def resolve_user(store: Store, token: Optional[str]) -> User:
    if not token:
        raise AuthenticationError("Authentication required")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid or expired token", error=str(e))
    user = store.users.get(payload.get("sub", ""))
    if not user:
        raise AuthenticationError("Account no longer exists")
    return user


def public_profile(user: User) -> dict:
    return user.model_dump(exclude={"password_hash"})


def signup(store: Store, name: str, email: str, password: str) -> User:
    email = email.lower()
    if store.users.get_by_email(email):
        raise ValidationError("Email already registered")
    user = store.users.add(User(name=name.strip(), email=email, password_hash=hash_password(password)))
    logger.info("Account created", user_id=user.id)
    return user


def login(store: Store, email: str, password: str) -> User:
    user = store.users.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return user


def update_profile(store: Store, user: User, name: Optional[str] = None, profile_image: Optional[str] = None) -> User:
    changes = {}
    if name is not None:
        changes["name"] = name.strip()
    if profile_image is not None:
        changes["profile_image"] = profile_image
    if not changes:
        return user
    updated = store.users.update(user.id, changes)
    if not updated:
        raise NotFoundError("User not found")
    return updated


def change_password(store: Store, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")
    store.users.update(user.id, {"password_hash": hash_password(new_password)})
    logger.info("Password changed", user_id=user.id)


def delete_account(store: Store, user: User) -> None:
    """Remove the account and empty its cart. Orders stay as historical records."""
    store.carts.clear(user.id)
    if not store.users.delete(user.id):
        raise NotFoundError("User not found")
    logger.info("Account deleted", user_id=user.id)
