"""Tests for schema provisioning, CLI parsing and the composition root."""

import uuid
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import inspect

from blogclient.cli import build_parser
from blogclient.core.config import Settings
from blogclient.database import _with_sslmode, create_db_and_tables, get_engine
from blogclient.main import BlogClient


class TestCreateDbAndTables:
    def test_creates_tables(self):
        engine = get_engine("sqlite://")

        create_db_and_tables(engine)

        assert set(inspect(engine).get_table_names()) >= {"users", "sessions", "content"}

    def test_email_and_token_are_unique(self):
        engine = get_engine("sqlite://")
        create_db_and_tables(engine)
        inspector = inspect(engine)

        user_unique = {
            tuple(index["column_names"])
            for index in inspector.get_indexes("users")
            if index["unique"]
        }
        session_pk = inspector.get_pk_constraint("sessions")["constrained_columns"]

        assert ("email",) in user_unique
        assert session_pk == ["token"]

    def test_missing_url(self, monkeypatch):
        monkeypatch.setattr(
            "blogclient.database.get_settings",
            lambda: type("S", (), {"DATABASE_URL": None})(),
        )

        with pytest.raises(RuntimeError):
            get_engine()


def test_sslmode_is_appended_to_postgres_urls():
    assert _with_sslmode("postgresql://u@h/db") == "postgresql://u@h/db?sslmode=require"
    assert _with_sslmode("postgresql://u@h/db?a=1") == "postgresql://u@h/db?a=1&sslmode=require"
    assert _with_sslmode("postgresql://u@h/db?sslmode=disable") == "postgresql://u@h/db?sslmode=disable"
    assert _with_sslmode("sqlite://") == "sqlite://"


class TestParser:
    def test_register(self):
        args = build_parser().parse_args(
            ["register", "--name", "Alice", "--email", "a@x.com", "--age", "30"]
        )

        assert args.command == "register"
        assert args.age == 30
        assert args.password is None

    def test_posts_delete_takes_uuid(self):
        post_id = uuid.uuid4()

        args = build_parser().parse_args(["posts", "delete", str(post_id)])

        assert args.action == "delete"
        assert args.post_id == post_id

    def test_sessions_takes_no_arguments(self):
        args = build_parser().parse_args(["sessions"])

        assert args.command == "sessions"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestBlogClient:
    @pytest.mark.asyncio
    async def test_startup_without_cached_session(self, tmp_path):
        settings = Settings(
            SUPABASE_URL="https://project.supabase.co",
            SUPABASE_KEY="anon",
            SESSION_CACHE_PATH=tmp_path / "session.json",
        )
        client = BlogClient(settings, MagicMock())

        result = await client.startup()

        assert result.authenticated is False
        assert client.context.loading is False
        assert client.sessions.context is client.context
        assert client.sessions.session_ttl == timedelta(hours=24)
