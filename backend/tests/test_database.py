"""Tests for engine options and the session dependency."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from vanzone.config import Settings
from vanzone.database import engine_options, get_db


class TestEngineOptions:
    """Tests for engine settings derived from configuration."""

    def test_defaults(self):
        """Defaults give a small pool with recycling and a statement timeout."""
        options = engine_options(Settings())

        assert options["pool_size"] == 5
        assert options["max_overflow"] == 10
        assert options["pool_recycle"] == 1800
        assert options["pool_pre_ping"] is True
        server_settings = options["connect_args"]["server_settings"]
        assert server_settings["statement_timeout"] == "5000"
        assert server_settings["application_name"] == "vanzone"

    def test_overrides(self):
        """Pool sizes and debug echo follow the settings."""
        options = engine_options(Settings(db_pool_size=20, db_max_overflow=0, debug=True))

        assert options["pool_size"] == 20
        assert options["max_overflow"] == 0
        assert options["echo"] is True

    def test_zero_disables_timeout_and_recycle(self):
        """A zero timeout or recycle interval leaves the option out."""
        options = engine_options(Settings(db_statement_timeout_ms=0, db_pool_recycle_seconds=0))

        assert "pool_recycle" not in options
        assert "statement_timeout" not in options["connect_args"]["server_settings"]

    def test_pool_size_must_be_positive(self):
        """A pool without connections is rejected."""
        with pytest.raises(Exception):
            Settings(db_pool_size=0)


class TestGetDb:
    """Tests for the request session dependency."""

    @staticmethod
    def _session_maker(session):
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=session)
        context.__aexit__ = AsyncMock(return_value=False)
        return MagicMock(return_value=context)

    async def test_yields_session_without_committing(self):
        """Writes are committed by the store, not by the dependency."""
        session = AsyncMock()

        with patch("vanzone.database.async_session_maker", self._session_maker(session)):
            gen = get_db()
            assert await gen.__anext__() is session
            with pytest.raises(StopAsyncIteration):
                await gen.__anext__()

        session.commit.assert_not_awaited()
        session.rollback.assert_not_awaited()

    async def test_rolls_back_on_error(self):
        """A failing request rolls the session back and re-raises."""
        session = AsyncMock()

        with patch("vanzone.database.async_session_maker", self._session_maker(session)):
            gen = get_db()
            await gen.__anext__()
            with pytest.raises(RuntimeError):
                await gen.athrow(RuntimeError("boom"))

        session.rollback.assert_awaited_once()
