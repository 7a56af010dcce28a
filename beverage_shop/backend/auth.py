import logging
from typing import Optional

from ..config import PROFILES_TABLE
from ..models import Session
from .client import AuthError, BackendError, SessionExpiredError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"
ADMIN_ROLE = "admin"

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."

# -----------------------------
# Page access
# -----------------------------
PUBLIC_PAGES = ("login", "signup")
USER_PAGES = ("home", "ordering")
ADMIN_PAGES = ("admin", "add_drink", "sales_analytics")


def allowed_pages(session: Optional[Session]):
    if session is None:
        return PUBLIC_PAGES
    if session.is_admin:
        return USER_PAGES + ADMIN_PAGES
    return USER_PAGES


def can_view(session: Optional[Session], page: str) -> bool:
    return page in allowed_pages(session)


class AuthService:
    def __init__(self, client, redirect_to: Optional[str] = None):
        self.client = client
        self.redirect_to = redirect_to

    def sign_up(self, email: str, password: str) -> Optional[Session]:
        """
        Create the account and give it the default role.

        Returns a session when the project hands one out on sign-up (email
        confirmation disabled); otherwise None and the user has to confirm
        the address before logging in.
        """
        data = self.client.sign_up(email, password, redirect_to=self.redirect_to)
        user = data.get("user") or data
        user_id = user.get("id")
        if not user_id:
            raise AuthError("Sign-up did not return a user")

        token = data.get("access_token")
        try:
            self.client.insert(PROFILES_TABLE, [{"id": user_id, "role": DEFAULT_ROLE}],
                               access_token=token)
        except BackendError as e:
            logger.error("Error assigning role to new user %s: %s", user_id, e.message)
            raise

        logger.info("Signed up %s", email)
        if not token:
            return None
        return Session(
            user_id=user_id,
            email=user.get("email", email),
            access_token=token,
            refresh_token=data.get("refresh_token"),
            role=DEFAULT_ROLE,
        )

    def sign_in(self, email: str, password: str) -> Session:
        data = self.client.sign_in_with_password(email, password)
        user = data.get("user") or {}
        token = data.get("access_token")
        if not token or not user.get("id"):
            raise AuthError("Failed to log in. Did you confirm your email?")

        session = Session(
            user_id=user["id"],
            email=user.get("email", email),
            access_token=token,
            refresh_token=data.get("refresh_token"),
        )
        session.role = self.fetch_role(session.user_id, token)
        logger.info("Signed in %s (role=%s)", session.email, session.role)
        return session

    def fetch_role(self, user_id: str, access_token: Optional[str] = None) -> Optional[str]:
        try:
            rows = self.client.select(PROFILES_TABLE, "role", {"id": user_id},
                                      access_token=access_token)
        except BackendError as e:
            logger.error("Error fetching user role: %s", e.message)
            return None
        if not rows:
            logger.warning("No profile found for user %s", user_id)
            return None
        return rows[0].get("role")

    def refresh(self, session: Session) -> Session:
        """
        Swap the session's expired access token for a new one, in place.

        Raises SessionExpiredError when there is no refresh token or the
        backend refuses it; the user then has to log in again. Errors
        reaching the backend are raised unchanged.
        """
        if not session.refresh_token:
            raise SessionExpiredError(SESSION_EXPIRED_MESSAGE, 401)
        try:
            data = self.client.refresh_session(session.refresh_token)
        except BackendError as e:
            if e.status_code is None:
                raise
            logger.warning("Could not refresh session for %s: %s", session.email, e.message)
            raise SessionExpiredError(SESSION_EXPIRED_MESSAGE, e.status_code) from e

        token = data.get("access_token")
        if not token:
            raise SessionExpiredError(SESSION_EXPIRED_MESSAGE, 401)
        session.access_token = token
        session.refresh_token = data.get("refresh_token") or session.refresh_token
        logger.info("Refreshed session for %s", session.email)
        return session

    def sign_out(self, session: Session) -> None:
        self.client.sign_out(session.access_token)
        logger.info("Signed out %s", session.email)
