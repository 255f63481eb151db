"""Plain in-memory authentication.

Email/password lookup against a process-local table, seeded with a test user.
"""

from docchat.auth.user_store import (
    InvalidCredentialsError,
    User,
    UserExistsError,
    UserStore,
    get_user_store,
)

__all__ = [
    "InvalidCredentialsError",
    "User",
    "UserExistsError",
    "UserStore",
    "get_user_store",
]
