"""
auth/store.py -- SQLAlchemy Core persistence layer for user records.

Pattern: Repository + Data Mapper.
UserStore is the repository; _row_to_user / _user_to_values are the mappers.
Route and service code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  UNIQUE(username) is enforced by the table. SQLite and PostgreSQL both treat
  NULLs as distinct in UNIQUE constraints, so any number of records registered
  without a username can coexist while named records stay unique.

Document shape:
  interests is a JSON column holding the ordered list as-is, so one row reads
  back as one self-contained user document.

  The role union is flattened to (role, program, department) on write and
  rebuilt on read. Exactly one of program/department is ever non-NULL.

Layer rule: no imports from api/, core/, or accounts/.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Integer, MetaData, String, Table, Text, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.errors import DuplicateIdentity, UserNotFound
from auth.models import FacultyRole, Role, StudentRole, User

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "user_info",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), unique=True),  # NULL = registered without login identity
    Column("password_hash", Text, nullable=False),
    Column("first_name", String(255), nullable=False),
    Column("last_name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("id_number", String(64), nullable=False),
    Column("birthday", String(32), nullable=False),
    Column("role", String(16), nullable=False),  # "Student" | "Faculty"
    Column("program", String(255)),  # students only
    Column("department", String(255)),  # faculty only
    Column("interests", JSON, nullable=False),
    Column("mbti_type", String(16)),
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so readers never block behind a writer.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User records.

    Usage:
        store = UserStore("sqlite:///:memory:")
        user = store.create_user(User(...))
        found = store.get_by_username("alice")
        found.mbti_type = "INTJ"
        store.save_user(found)
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite") and ":memory:" not in db_url and "mode=memory" not in db_url:
            event.listen(self.engine, "connect", _set_wal_mode)
        _metadata.create_all(self.engine)

    def create_user(self, user: User) -> User:
        """Insert a new record and return it with id and created_at filled in.

        Raises DuplicateIdentity if the username is already taken. The check is
        the UNIQUE constraint itself, so two concurrent registrations for the
        same name cannot both succeed.
        """
        created_at = _now_iso()
        try:
            with self.engine.connect() as conn:
                result = conn.execute(_users.insert().values(created_at=created_at, **_user_to_values(user)))
                conn.commit()
        except IntegrityError as exc:
            raise DuplicateIdentity("Username already exists.") from exc
        user.id = result.inserted_primary_key[0]
        user.created_at = created_at
        return user

    def get_by_username(self, username: str) -> User | None:
        """Look up a user by exact username (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.username == username)).fetchone()
        return _row_to_user(row) if row is not None else None

    def save_user(self, user: User) -> None:
        """Persist the mutable profile fields of an existing record.

        Only interests and mbti_type are written. username, password_hash and
        the role fields are fixed at registration and never updated here.
        Raises UserNotFound if the row no longer exists.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _users.update()
                .where(_users.c.id == user.id)
                .values(interests=list(user.interests), mbti_type=user.mbti_type)
            )
            conn.commit()
        if result.rowcount == 0:
            raise UserNotFound("User not found")

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _user_to_values(user: User) -> dict:
    return {
        "username": user.username,
        "password_hash": user.password_hash,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "id_number": user.id_number,
        "birthday": user.birthday,
        "role": user.role.tab,
        "program": user.program,
        "department": user.department,
        "interests": list(user.interests),
        "mbti_type": user.mbti_type,
    }


def _row_to_role(row) -> Role:
    if row.role == "Faculty":
        return FacultyRole(department=row.department)
    return StudentRole(program=row.program)


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        id_number=row.id_number,
        birthday=row.birthday,
        role=_row_to_role(row),
        interests=list(row.interests or []),
        mbti_type=row.mbti_type,
        created_at=row.created_at,
    )
