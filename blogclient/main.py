# blogclient/main.py
import logging
from datetime import timedelta

from supabase import AsyncClient

from blogclient.core.config import Settings, get_settings
from blogclient.core.supabase_client import supabase_public
from blogclient.repositories.content_repo import ContentRepository
from blogclient.repositories.session_cache import LocalSessionCache
from blogclient.repositories.session_repo import SessionRepository
from blogclient.repositories.user_repo import UserRepository
from blogclient.schemas.session import RestoreResult
from blogclient.services.content_service import ContentService
from blogclient.services.session_manager import SessionContext, SessionManager
from blogclient.services.summarizer import SummarizerClient

logger = logging.getLogger(__name__)


class BlogClient:
    """
    Composition root: wires settings, store adapters and services.

    Usage:

        client = await BlogClient.create()
        await client.startup()          # restores the cached session
        if client.context.is_authenticated:
            posts = await client.content.list_posts()
    """

    def __init__(self, settings: Settings, store: AsyncClient):
        self.settings = settings
        self.context = SessionContext()

        self.sessions = SessionManager(
            users=UserRepository(store),
            sessions=SessionRepository(store),
            cache=LocalSessionCache(settings.SESSION_CACHE_PATH),
            context=self.context,
            session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
            platform=settings.DEVICE_PLATFORM,
        )
        self.content = ContentService(ContentRepository(store), self.sessions)
        self.summarizer = SummarizerClient(
            settings.SUMMARIZER_BASE_URL, timeout=settings.SUMMARIZER_TIMEOUT
        )

    @classmethod
    async def create(cls, settings: Settings | None = None) -> "BlogClient":
        """Build a client on the shared Supabase connection."""
        return cls(settings or get_settings(), await supabase_public())

    async def startup(self) -> RestoreResult:
        """
        Application start.

        Runs restore() once; the UI shows a loading state until
        `context.loading` turns False.
        """
        result = await self.sessions.restore()
        logger.info("Startup: authenticated=%s", result.authenticated)
        return result
