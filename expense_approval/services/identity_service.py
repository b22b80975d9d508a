# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Identity and role service: principals, sessions and authorization."""

import logging
import uuid
from collections.abc import Iterable
from datetime import timedelta
from urllib.parse import quote

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from expense_approval.config import settings
from expense_approval.events import AppEvent, event_bus
from expense_approval.exceptions import (
    DuplicateIdentity,
    Forbidden,
    InvalidCredentials,
    NotFound,
)
from expense_approval.models import AuthSession, User, UserRole
from expense_approval.models.base import utcnow
from expense_approval.rbac.roles import ROLE_PERMISSIONS
from expense_approval.schemas.user import UserCreate
from expense_approval.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

AVATAR_URL_TEMPLATE = "https://ui-avatars.com/api/?name={name}&background=random"


def default_avatar_url(name: str) -> str:
    """Generated initials avatar for a principal without a picture."""
    return AVATAR_URL_TEMPLATE.format(name=quote(name, safe=""))


# Authorization predicates


def has_any_role(principal: User | None, roles: Iterable[UserRole]) -> bool:
    """Return True if a principal is present and holds one of ``roles``."""
    if principal is None:
        return False
    return principal.role in set(roles)


def has_permission(principal: User | None, permission_code: str) -> bool:
    """Check a permission code against the principal's role."""
    if principal is None or not principal.is_active:
        return False
    return permission_code in ROLE_PERMISSIONS.get(principal.role, frozenset())


def require_permission(principal: User | None, permission_code: str) -> None:
    """Raise Forbidden unless the principal holds the permission."""
    if not has_permission(principal, permission_code):
        raise Forbidden(f"Permission denied: {permission_code}")


# Principals


def is_first_run(db: Session) -> bool:
    """Check if this is the first run (no users exist)."""
    return db.query(User).count() == 0


def get_user_by_id(db: Session, user_id: uuid.UUID) -> User | None:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email (exact, case-sensitive match)."""
    return db.query(User).filter(User.email == email).first()


def register_principal(db: Session, data: UserCreate) -> User:
    """Register a new principal.

    The email must not be registered yet. The new principal gets a fresh id
    and a generated avatar, and is not logged in.
    """
    if get_user_by_email(db, data.email) is not None:
        raise DuplicateIdentity(f"Email already exists: {data.email}")

    user = User(
        id=uuid.uuid4(),
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        role=data.role,
        department=data.department,
        avatar_url=default_avatar_url(data.name),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered {user.role.value} {user.email}")
    event_bus.publish_sync(
        AppEvent.USER_CREATED,
        {"user_id": str(user.id), "email": user.email, "role": user.role.value},
    )

    return user


def list_principals(
    db: Session,
    actor: User,
    role: UserRole | None = None,
    department: str | None = None,
    search: str | None = None,
) -> list[User]:
    """List principals for user management, ordered by name."""
    require_permission(actor, "user.manage")

    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    if department:
        query = query.filter(User.department == department)
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern))
        )
    return query.order_by(User.name).all()


def change_role(
    db: Session, actor: User, user_id: uuid.UUID, role: UserRole
) -> User:
    """Administrative role change; the only way a role is altered."""
    require_permission(actor, "user.manage")

    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")

    previous = user.role
    user.role = role
    db.commit()
    db.refresh(user)

    logger.info(
        f"{actor.email} changed role of {user.email} "
        f"from {previous.value} to {role.value}"
    )
    event_bus.publish_sync(
        AppEvent.USER_ROLE_CHANGED,
        {
            "user_id": str(user.id),
            "previous_role": previous.value,
            "role": role.value,
            "changed_by": str(actor.id),
        },
    )

    return user


# Sessions


def authenticate(db: Session, email: str, password: str) -> User:
    """Verify credentials of an active account."""
    user = get_user_by_email(db, email)
    if not user or not user.is_active:
        raise InvalidCredentials()
    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    return user


def create_session(db: Session, user_id: uuid.UUID) -> str:
    """Create a new session for a user and return its token."""
    token = str(uuid.uuid4())
    expires_at = utcnow() + timedelta(days=settings.session_expiry_days)

    session = AuthSession(
        user_id=user_id,
        token=token,
        expires_at=expires_at,
    )
    db.add(session)
    db.commit()

    event_bus.publish_sync(AppEvent.USER_LOGIN, {"user_id": str(user_id)})

    return token


def login(db: Session, email: str, password: str) -> tuple[User, str]:
    """Authenticate and establish a session in one step."""
    user = authenticate(db, email, password)
    user_id = user.id
    token = create_session(db, user_id)
    logger.info(f"{email} logged in")
    # Re-query after the session commit expired the instance
    return get_user_by_id(db, user_id), token


def get_session(db: Session, token: str) -> AuthSession | None:
    """Get a valid session by token; expired sessions are removed."""
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not session:
        return None
    if session.expires_at < utcnow():
        db.delete(session)
        db.commit()
        return None
    return session


def current_principal(db: Session, token: str | None) -> User | None:
    """Resolve the active principal behind a session token."""
    if not token:
        return None
    session = get_session(db, token)
    if not session:
        return None
    user = get_user_by_id(db, session.user_id)
    if not user or not user.is_active:
        return None
    return user


def end_session(db: Session, token: str | None) -> bool:
    """Delete a session. Safe to call repeatedly or with an unknown token."""
    if not token:
        return False
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not session:
        return False

    user_id = session.user_id
    db.delete(session)
    db.commit()
    event_bus.publish_sync(AppEvent.USER_LOGOUT, {"user_id": str(user_id)})
    return True


def cleanup_expired_sessions(db: Session) -> int:
    """Delete all expired sessions. Returns count of deleted sessions."""
    count = (
        db.query(AuthSession)
        .filter(AuthSession.expires_at < utcnow())
        .delete()
    )
    db.commit()
    return count
