# lockerhub/services/user_service.py
"""
User records and the thin identity boundary (register / login).
No passwords or tokens are handled here: the caller's identity is trusted.
Role changes and deletes are unconditional; deleting a user does not touch
the packages, sessions or logs that reference it.
"""

from lockerhub.database import LockerStore
from lockerhub.errors import ConflictError, NotFoundError
from lockerhub.models.enums import UserRole
from lockerhub.models.user import User
from lockerhub.schemas.user import UserOut, UserRegister
from lockerhub.services.base import coerce_enum, engine_operation, load_or_raise, snapshot
from lockerhub.utils.clock import utcnow
from lockerhub.utils.ids import new_id
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)


def lookup_user_by_email(db, email: str):
    """Find a user by email (case-insensitive). Returns None if not found."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


@engine_operation
async def register_user(store: LockerStore, data: UserRegister, role: UserRole = UserRole.USER) -> UserOut:
    role = coerce_enum(UserRole, role, "role")
    with store.transaction() as db:
        if lookup_user_by_email(db, data.email):
            raise ConflictError("User already exists")

        now = utcnow()
        user = User(
            id=new_id(),
            email=data.email.strip().lower(),
            full_name=data.full_name,
            phone=data.phone,
            role=role.value,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        db.flush()
        logger.info(f"[User] registered {user.email} as {user.role}")
        return UserOut.model_validate(user)


@engine_operation
async def login(store: LockerStore, email: str) -> UserOut:
    with store.transaction() as db:
        user = lookup_user_by_email(db, email)
        if not user:
            raise NotFoundError("Invalid credentials")
        logger.info(f"[User] {user.email} signed in")
        return UserOut.model_validate(user)


@engine_operation
async def get_all_users(store: LockerStore) -> list[UserOut]:
    with store.transaction() as db:
        return snapshot(UserOut, db.query(User).order_by(User.created_at).all())


@engine_operation
async def get_users_by_role(store: LockerStore, role: UserRole) -> list[UserOut]:
    role = coerce_enum(UserRole, role, "role")
    with store.transaction() as db:
        rows = db.query(User).filter(User.role == role.value).order_by(User.created_at).all()
        return snapshot(UserOut, rows)


@engine_operation
async def get_user(store: LockerStore, user_id: str) -> UserOut:
    with store.transaction() as db:
        return UserOut.model_validate(load_or_raise(db, User, user_id, "User"))


@engine_operation
async def update_user_role(store: LockerStore, user_id: str, role: UserRole) -> UserOut:
    role = coerce_enum(UserRole, role, "role")
    with store.transaction() as db:
        user = load_or_raise(db, User, user_id, "User")
        previous = user.role
        user.role = role.value
        user.updated_at = utcnow()
        db.flush()
        logger.info(f"[User] {user.email} role {previous} → {user.role}")
        return UserOut.model_validate(user)


@engine_operation
async def delete_user(store: LockerStore, user_id: str) -> None:
    with store.transaction() as db:
        user = load_or_raise(db, User, user_id, "User")
        db.delete(user)
        logger.info(f"[User] {user.email} deleted")
