"""
Per-service runtime context.

Holds the pooled database engine, the session factory and the token issuer.
It is built once at startup, handed to request handlers through
``app.state.context`` and closed at shutdown.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from auth.jwt import TokenIssuer
from config.settings import Settings
from database.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


class ServiceContext:
    def __init__(
        self,
        engine: AsyncEngine,
        tokens: TokenIssuer,
        bcrypt_rounds: int = 12,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self.engine = engine
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds
        self.session_factory = session_factory or build_session_factory(engine)
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        engine = build_engine(settings)
        tokens = TokenIssuer(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiry_seconds=settings.jwt_expiry_seconds,
        )
        logger.info(
            "Service context ready (db=%s, alg=%s)",
            engine.url.render_as_string(hide_password=True),
            settings.jwt_algorithm,
        )
        return cls(engine, tokens, bcrypt_rounds=settings.bcrypt_rounds)

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.engine.dispose()
        logger.info("Service context closed")
