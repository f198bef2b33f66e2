"""
Business logic for users.

``UserService`` stores users in the SQLite ``users`` table and exposes
the five operations used by the API: create, list, get, update and
delete.  Every call opens its own connection and closes it before
returning.  The blocking ``sqlite3`` work runs in the worker
threadpool so a locked database never stalls the event loop.

Email uniqueness is enforced by the table's ``UNIQUE`` constraint.
The service never checks for an existing address before writing; it
attempts the write and maps the resulting ``sqlite3.IntegrityError``
to ``ConflictError``, so two concurrent requests with the same email
cannot both succeed.
"""

import logging
import sqlite3
from typing import List

from starlette.concurrency import run_in_threadpool

from user_crud_api.app.core.db import get_connection
from user_crud_api.app.core.errors import ConflictError, InternalError, NotFoundError
from user_crud_api.app.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, email, first_name, last_name"

# Columns a caller may change.  Guards the dynamic SET clause in ``update_user``.
UPDATABLE_COLUMNS = ("email", "first_name", "last_name")

# Largest value SQLite can store in an INTEGER column.
MAX_USER_ID = 2**63 - 1


def _not_found(user_id: int) -> NotFoundError:
    return NotFoundError(f"User with ID {user_id} not found")


def _storable(user_id: int) -> bool:
    # sqlite3 raises OverflowError for ids outside the INTEGER range;
    # no row can have such an id.
    return -MAX_USER_ID - 1 <= user_id <= MAX_USER_ID


class UserService:
    """Service for working with users."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Insert a new user and return it with its assigned id.

        Raises ``ConflictError`` if the email already belongs to a user.
        """
        return await run_in_threadpool(cls._create_user, data)

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """Return all users in insertion order."""
        return await run_in_threadpool(cls._list_users)

    @classmethod
    async def get_user(cls, user_id: int) -> UserRead:
        """Retrieve a user by ID or raise ``NotFoundError``."""
        return await run_in_threadpool(cls._get_user, user_id)

    @classmethod
    async def update_user(cls, user_id: int, data: UserUpdate) -> UserRead:
        """Merge the supplied fields onto an existing user.

        Only keys present in the request are written; an empty update
        returns the user unchanged.  Raises ``NotFoundError`` if the
        user does not exist and ``ConflictError`` if the new email
        belongs to a different user.
        """
        return await run_in_threadpool(cls._update_user, user_id, data)

    @classmethod
    async def delete_user(cls, user_id: int) -> None:
        """Permanently delete a user or raise ``NotFoundError``."""
        await run_in_threadpool(cls._delete_user, user_id)

    # ------------------------------------------------------------------
    # Blocking implementations, executed in the threadpool
    # ------------------------------------------------------------------
    @classmethod
    def _create_user(cls, data: UserCreate) -> UserRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO users (email, first_name, last_name) VALUES (?, ?, ?)",
                (data.email, data.first_name, data.last_name),
            )
            user_id = cursor.lastrowid
            conn.commit()
            logger.info("Created user %s (%s)", user_id, data.email)
            return UserRead(
                id=user_id,
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
            )
        except sqlite3.IntegrityError:
            conn.rollback()
            logger.warning("Rejected duplicate email %s", data.email)
            raise ConflictError("Email address already exists.")
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Failed to create user %s", data.email)
            raise InternalError("Failed to create user") from e
        finally:
            conn.close()

    @classmethod
    def _list_users(cls) -> List[UserRead]:
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {USER_COLUMNS} FROM users ORDER BY id").fetchall()
            return [cls._row_to_user_read(row) for row in rows]
        except sqlite3.Error as e:
            logger.exception("Failed to list users")
            raise InternalError("Failed to list users") from e
        finally:
            conn.close()

    @classmethod
    def _get_user(cls, user_id: int) -> UserRead:
        if not _storable(user_id):
            raise _not_found(user_id)
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        except sqlite3.Error as e:
            logger.exception("Failed to read user %s", user_id)
            raise InternalError("Failed to read user") from e
        finally:
            conn.close()
        if row is None:
            raise _not_found(user_id)
        return cls._row_to_user_read(row)

    @classmethod
    def _update_user(cls, user_id: int, data: UserUpdate) -> UserRead:
        if not _storable(user_id):
            raise _not_found(user_id)
        updates = {k: v for k, v in data.changes().items() if k in UPDATABLE_COLUMNS}
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if updates:
                assignments = ", ".join(f"{column} = ?" for column in updates)
                cursor.execute(
                    f"UPDATE users SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*updates.values(), user_id),
                )
                if cursor.rowcount == 0:
                    conn.rollback()
                    raise _not_found(user_id)
            row = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
            if row is None:
                raise _not_found(user_id)
            conn.commit()
            if updates:
                logger.info("Updated user %s: %s", user_id, ", ".join(updates))
            return cls._row_to_user_read(row)
        except sqlite3.IntegrityError:
            conn.rollback()
            logger.warning("Rejected email change for user %s: %s in use", user_id, updates.get("email"))
            raise ConflictError("Email address already exists for another user.")
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Failed to update user %s", user_id)
            raise InternalError("Failed to update user") from e
        finally:
            conn.close()

    @classmethod
    def _delete_user(cls, user_id: int) -> None:
        if not _storable(user_id):
            raise _not_found(user_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            affected = cursor.rowcount
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Failed to delete user %s", user_id)
            raise InternalError("Failed to delete user") from e
        finally:
            conn.close()
        if not affected:
            logger.warning("Delete of unknown user %s", user_id)
            raise _not_found(user_id)
        logger.info("Deleted user %s", user_id)

    @staticmethod
    def _row_to_user_read(row: sqlite3.Row) -> UserRead:
        """Convert a database row to a ``UserRead`` schema instance."""
        return UserRead(
            id=row["id"],
            email=row["email"],
            first_name=row["first_name"],
            last_name=row["last_name"],
        )
