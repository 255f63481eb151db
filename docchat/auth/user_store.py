"""In-memory user store for authentication.

Users live in a process-local dict keyed by lower-cased email. Passwords are
kept as given; there is no hashing and nothing survives a restart.
"""

import logging
import threading
import uuid

from pydantic import BaseModel

from docchat.models.schemas import PublicUser

logger = logging.getLogger(__name__)


class User(BaseModel):
    id: str
    email: str
    name: str
    password: str

    def public(self) -> PublicUser:
        """Return the user without the password."""
        return PublicUser(id=self.id, email=self.email, name=self.name)


class UserExistsError(Exception):
    """Raised when registering an email that is already taken."""

    pass


class InvalidCredentialsError(Exception):
    """Raised when the email is unknown or the password does not match."""

    pass


DEFAULT_USERS = (
    User(id="1", email="test@example.com", name="Test User", password="password123"),
)


class UserStore:
    """Credential lookup table shared by the login and register routes."""

    def __init__(self, users: tuple[User, ...] = DEFAULT_USERS) -> None:
        self._users: dict[str, User] = {u.email.lower(): u for u in users}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def get(self, email: str) -> User | None:
        return self._users.get(email.lower())

    def register(self, name: str, email: str, password: str) -> PublicUser:
        """Add a new user.

        Raises:
            UserExistsError: If the email is already registered.
        """
        key = email.lower()
        with self._lock:
            if key in self._users:
                raise UserExistsError("User already exists")
            user = User(id=uuid.uuid4().hex, email=key, name=name, password=password)
            self._users[key] = user
        logger.info(f"Registered user {key}")
        return user.public()

    def authenticate(self, email: str, password: str) -> PublicUser:
        """Check credentials and return the matching user.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong.
        """
        user = self.get(email)
        if user is None or user.password != password:
            raise InvalidCredentialsError("Invalid credentials")
        return user.public()


_user_store: UserStore | None = None


def get_user_store() -> UserStore:
    """Get or create the global user store."""
    global _user_store
    if _user_store is None:
        _user_store = UserStore()
    return _user_store
