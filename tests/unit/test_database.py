"""Unit tests for src/infrastructure/database.py.

Tests cover Settings defaults, env var override, object types and the
transaction scope.
No database connection is required.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.database import AsyncSessionLocal, Base, Settings, engine, transaction


def test_settings_default_url_uses_asyncpg():
    assert "postgresql+asyncpg" in Settings().database_url


def test_settings_default_url_targets_localhost():
    assert "localhost" in Settings().database_url


def test_settings_reads_database_url_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@myhost/mydb")
    assert Settings().database_url == "postgresql+asyncpg://u:p@myhost/mydb"


def test_base_is_declarative_base():
    assert issubclass(Base, DeclarativeBase)


def test_engine_is_async():
    assert isinstance(engine, AsyncEngine)


def test_session_factory_produces_async_sessions():
    assert isinstance(AsyncSessionLocal, async_sessionmaker)
    assert AsyncSessionLocal.class_ is AsyncSession


def test_settings_echo_sql_defaults_off():
    assert Settings().echo_sql is False


# --- transaction scope ---

def _factory():
    session = MagicMock()
    scope = MagicMock()
    scope.__aenter__.return_value = session
    return MagicMock(return_value=scope), session


async def test_transaction_yields_session_inside_begin():
    factory, session = _factory()
    async with transaction(factory) as active:
        assert active is session
    session.begin.return_value.__aexit__.assert_awaited_once_with(None, None, None)


async def test_transaction_propagates_errors_to_begin_block():
    factory, session = _factory()
    with pytest.raises(RuntimeError):
        async with transaction(factory):
            raise RuntimeError("boom")
    exc_type = session.begin.return_value.__aexit__.await_args.args[0]
    assert exc_type is RuntimeError
