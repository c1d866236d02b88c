"""Session service: implements SessionPort for the demo login.

Any non-empty email and password are accepted. Only the email is kept;
the password is checked for presence and then dropped.
"""

import logging

from .models import Loaded, LoginResult, Session
from .persistence import DEFAULT_SESSION_KEY, PersistenceAdapter
from .ports import SessionPort

logger = logging.getLogger(__name__)

DEMO_CREDENTIALS: tuple[str, str] = ("demo@demo.com", "demo")

MISSING_CREDENTIALS_MESSAGE = "Please enter email and password (demo)"


class SessionService(SessionPort):
    """Core implementation of SessionPort."""

    def __init__(
        self, persistence: PersistenceAdapter, key: str = DEFAULT_SESSION_KEY
    ):
        """Initialize the session service.

        Args:
            persistence: PersistenceAdapter used to save or remove the session.
            key: Storage key holding the session.
        """
        self.persistence = persistence
        self.key = key
        self._session: Session | None = None

    async def initialize(self) -> None:
        """Restore a persisted session, if one is stored and readable."""
        result = await self.persistence.load(self.key, Session.from_dict)
        self._session = result.value if isinstance(result, Loaded) else None
        if self._session is not None:
            logger.info("Session restored", extra={"email": self._session.email})

    @property
    def current(self) -> Session | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    async def login(self, email: str, password: str) -> LoginResult:
        """Start a demo session.

        Returns:
            A failed LoginResult if either field is empty, otherwise a
            successful one carrying the new session.
        """
        if not email or not password:
            logger.info("Login rejected: missing email or password")
            return LoginResult(success=False, message=MISSING_CREDENTIALS_MESSAGE)

        session = Session(email=email)
        self._session = session
        await self.persistence.save(self.key, session.to_dict())

        logger.info(f"Logged in as {email}", extra={"email": email})
        return LoginResult(success=True, message=f"Welcome back, {email}", session=session)

    async def logout(self) -> None:
        """End the session and delete the stored key."""
        previous = self._session
        self._session = None
        await self.persistence.remove(self.key)

        if previous is not None:
            logger.info(f"Logged out {previous.email}", extra={"email": previous.email})
