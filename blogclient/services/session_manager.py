# blogclient/services/session_manager.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from blogclient.core.errors import (
    BlogClientError,
    DuplicateEmail,
    InvalidCredentials,
    NotAuthenticated,
    SessionExpiredOrRevoked,
    StoreError,
)
from blogclient.core.security import device_info, generate_token, hash_password, verify_password
from blogclient.repositories.session_cache import LocalSessionCache
from blogclient.repositories.session_repo import SessionRepository
from blogclient.repositories.user_repo import UserRepository
from blogclient.schemas.session import AuthResult, RestoreResult, SessionRecord
from blogclient.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """
    In-memory authentication state shared with the UI.

    Owned by the composition root; only SessionManager mutates it.
    `loading` stays True until the first restore() finishes.
    """

    user: UserRead | None = None
    token: str | None = None
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def set(self, user: UserRead, token: str) -> None:
        self.user = user
        self.token = token

    def clear(self) -> None:
        self.user = None
        self.token = None


class SessionManager:
    """
    Credential & session orchestration.

    Responsibilities:
      - register / login / logout / restore
      - profile and password changes for the logged in user
      - keep SessionContext, the local cache and the sessions table in step

    Callers must not run login / register / logout concurrently for the
    same device.
    """

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        cache: LocalSessionCache,
        context: SessionContext | None = None,
        session_ttl: timedelta = timedelta(hours=24),
        platform: str = "mobile",
        clock: Callable[[], datetime] | None = None,
    ):
        self.users = users
        self.sessions = sessions
        self.cache = cache
        self.context = context if context is not None else SessionContext()
        self.session_ttl = session_ttl
        self.platform = platform
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ----- Account lifecycle -----

    async def register(
        self,
        full_name: str,
        email: str,
        password: str,
        gender: str | None = None,
        age: int | None = None,
        role: str = "EDITOR",
    ) -> AuthResult:
        """
        Create an account and log it in.

        If the login step fails after the user row was written, the row
        is deleted again so the email stays free, and the login error is
        re-raised.

        Raises:
            pydantic.ValidationError: malformed input.
            DuplicateEmail: the email is already registered.
            StoreWriteFailure: persistence error.
        """
        payload = UserCreate(
            full_name=full_name,
            email=email,
            password=password,
            gender=gender,
            age=age,
            role=role,
        )

        if await self.users.get_by_email(payload.email) is not None:
            raise DuplicateEmail()

        record = await self.users.create(
            email=payload.email,
            password_digest=hash_password(payload.password),
            full_name=payload.full_name,
            gender=payload.gender,
            age=payload.age,
            role=payload.role,
        )
        logger.info("Registered user %s", record.id)

        try:
            return await self.login(payload.email, payload.password)
        except (BlogClientError, OSError):
            await self._discard_user(record.id)
            raise

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate and open a new session on this device.

        Raises:
            InvalidCredentials: unknown email or wrong password (same error).
            StoreReadFailure / StoreWriteFailure: store errors.
        """
        record = await self.users.get_by_email(email)
        if record is None or not verify_password(password, record.password_digest):
            raise InvalidCredentials()

        now = self._clock()
        token = generate_token()
        await self.sessions.create(
            SessionRecord(
                token=token,
                user_id=record.id,
                created_at=now,
                expired_at=now + self.session_ttl,
                logout_time=None,
                device_info=device_info(self.platform),
            )
        )

        user = record.stripped()
        await self.cache.save(token, user)
        self.context.set(user, token)
        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, token=token)

    async def logout(self) -> None:
        """
        Close the current session.

        Local state is always cleared. If the remote logout stamp fails
        the error is logged and the session simply runs until expiry.
        """
        token = self.context.token
        if token is None:
            snapshot = await self.cache.load()
            token = snapshot.auth_token if snapshot else None

        if token:
            try:
                stamped = await self.sessions.stamp_logout(token, self._clock())
                if not stamped:
                    logger.debug("Session was already closed")
            except StoreError as exc:
                logger.warning("Could not record logout remotely: %s", exc.message)

        user = self.context.user
        self.context.clear()
        self.context.loading = False
        try:
            await self.cache.clear()
        except OSError as exc:
            logger.warning("Could not clear local session cache: %s", exc)
        if user is not None:
            logger.info("User %s logged out", user.id)

    async def restore(self) -> RestoreResult:
        """
        Rebuild the session after an application restart.

        Never raises: a missing, expired, revoked or unknown token is
        reported as unauthenticated. A cached snapshot is only trusted
        after the sessions table confirms the token is still valid.
        """
        try:
            return await self._restore()
        except (BlogClientError, OSError) as exc:
            logger.error("Session restore failed: %s", exc)
            self.context.clear()
            return RestoreResult(authenticated=False)
        finally:
            self.context.loading = False

    async def _restore(self) -> RestoreResult:
        snapshot = await self.cache.load()
        if snapshot is None:
            return RestoreResult(authenticated=False)

        try:
            active = await self.sessions.get_active(snapshot.auth_token, self._clock())
        except StoreError as exc:
            # Token not proven invalid, keep the cache for the next start
            logger.warning("Could not validate cached session: %s", exc.message)
            self.context.clear()
            return RestoreResult(authenticated=False)

        if active is None or active.user_id != snapshot.user_data.id:
            logger.info("Cached session is no longer valid, clearing it")
            self.context.clear()
            await self.cache.clear()
            return RestoreResult(authenticated=False)

        self.context.set(snapshot.user_data, snapshot.auth_token)
        logger.info("Restored session for user %s", snapshot.user_data.id)
        return RestoreResult(authenticated=True, user=snapshot.user_data)

    async def require_session(self) -> UserRead:
        """
        Re-validate the current token against the sessions table.

        Used before writes so a token revoked on another device stops
        working here too.

        Raises:
            NotAuthenticated: nobody is logged in.
            SessionExpiredOrRevoked: the token is no longer valid; local
                state is cleared.
        """
        user = self.require_user()
        active = await self.sessions.get_active(self.context.token, self._clock())
        if active is None:
            self.context.clear()
            await self.cache.clear()
            raise SessionExpiredOrRevoked()
        return user

    # ----- Profile -----

    async def update_user_profile(self, updates: UserUpdate | dict[str, Any]) -> UserRead:
        """
        Partial profile update for the logged in user.

        Raises:
            NotAuthenticated: nobody is logged in.
            StoreWriteFailure: persistence error.
        """
        user = self.require_user()
        payload = updates if isinstance(updates, UserUpdate) else UserUpdate.model_validate(updates)

        record = await self.users.update(user.id, payload.model_dump(exclude_unset=True))
        updated = record.stripped()
        self.context.user = updated
        await self.cache.save_user(updated)
        return updated

    async def change_password(self, old_password: str, new_password: str) -> None:
        """
        Replace the password after checking the current one.

        Other sessions of the user stay valid.

        Raises:
            NotAuthenticated: nobody is logged in.
            InvalidCredentials: old_password does not match.
            StoreWriteFailure: persistence error.
        """
        user = self.require_user()
        if not new_password:
            raise ValueError("new password cannot be empty")

        record = await self.users.get_by_id(user.id)
        if record is None or not verify_password(old_password, record.password_digest):
            raise InvalidCredentials("Current password is incorrect")

        await self.users.update(user.id, {"password_digest": hash_password(new_password)})
        logger.info("Password changed for user %s", user.id)

    async def list_sessions(self, limit: int = 20) -> list[SessionRecord]:
        """
        Recent sessions of the logged in user across all devices, newest first.

        Raises:
            NotAuthenticated: nobody is logged in.
            StoreReadFailure: store error.
        """
        user = self.require_user()
        return await self.sessions.list_for_user(user.id, limit)

    # ----- Helpers -----

    def require_user(self) -> UserRead:
        if self.context.user is None or self.context.token is None:
            raise NotAuthenticated()
        return self.context.user

    async def _discard_user(self, user_id: uuid.UUID) -> None:
        try:
            await self.users.delete(user_id)
            logger.warning("Registration of user %s rolled back", user_id)
        except StoreError as exc:
            logger.error("Could not roll back user %s: %s", user_id, exc.message)
