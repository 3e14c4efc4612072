import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from supabase import Client

from .roles import Role, RouteDecision, resolve_route
from .utils.notifications import Notifier

logger = logging.getLogger(__name__)

Listener = Callable[["SessionStore"], None]


@dataclass
class AuthResult:
    user: Any = None
    session: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SessionStore:
    """
    Mirrors the Supabase auth session for one owner (a request, a test, a worker).

    `start()` subscribes to auth state changes and performs one initial
    session fetch; both feed `_apply`, so the store ends up in the same state
    whichever arrives first. `close()` drops the subscription. Backend errors
    raised by the sign in/up/out calls are turned into notifications and an
    `AuthResult` with `error` set, they are never raised to the caller.
    """

    def __init__(self, client: Client, notifier: Notifier):
        self._client = client
        self._notifier = notifier
        self._listeners: list[Listener] = []
        self._subscription = None
        self.session = None
        self.user = None
        self.loading = True

    def __enter__(self) -> "SessionStore":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def start(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self._client.auth.on_auth_state_change(self._on_auth_event)
        try:
            session = self._client.auth.get_session()
        except Exception as exc:
            logger.warning("Initial session fetch failed: %s", exc)
            session = None
        self._apply(session)

    def close(self) -> None:
        if self._subscription is None:
            return
        try:
            self._subscription.unsubscribe()
        finally:
            self._subscription = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def route(self) -> RouteDecision:
        return resolve_route(self.loading, self.user)

    def _on_auth_event(self, event, session) -> None:
        logger.debug("Auth state change: %s", event)
        self._apply(session)

    def _apply(self, session) -> None:
        self.session = session
        self.user = getattr(session, "user", None) if session else None
        self.loading = False
        for listener in list(self._listeners):
            listener(self)

    def sign_in_with_email(self, email: str, password: str) -> AuthResult:
        try:
            res = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            return self._failed(exc)

        if not res or not res.user:
            return self._failed("Invalid login credentials")

        self._apply(res.session)
        self._notifier.success("Logged in successfully!")
        return AuthResult(user=res.user, session=res.session)

    def sign_up_with_email(
        self,
        email: str,
        password: str,
        role: Role,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> AuthResult:
        metadata: dict[str, Any] = {"role": Role(role).value}
        # Coordinates only travel as a pair
        if latitude is not None and longitude is not None:
            metadata["latitude"] = latitude
            metadata["longitude"] = longitude

        try:
            res = self._client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": metadata},
                }
            )
        except Exception as exc:
            return self._failed(exc)

        if not res or not res.user:
            return self._failed("Unable to sign up")

        # No session until the email is confirmed, when confirmation is on
        if res.session:
            self._apply(res.session)
        self._notifier.success("Signed up successfully! Please check your email to confirm your account.")
        return AuthResult(user=res.user, session=res.session)

    def restore(self, access_token: str, refresh_token: str) -> AuthResult:
        """Adopt a session the client already holds (e.g. to sign it out server-side)."""
        try:
            res = self._client.auth.set_session(access_token, refresh_token)
        except Exception as exc:
            return self._failed(exc)

        session = getattr(res, "session", None)
        if session is None:
            return self._failed("Session expired. Please sign in again.")
        self._apply(session)
        return AuthResult(user=session.user, session=session)

    def sign_out(self) -> AuthResult:
        try:
            self._client.auth.sign_out()
        except Exception as exc:
            return self._failed(exc)

        self._apply(None)
        self._notifier.success("Logged out successfully!")
        return AuthResult()

    def _failed(self, exc) -> AuthResult:
        message = getattr(exc, "message", None) or str(exc)
        self._notifier.error(message)
        return AuthResult(error=message)
