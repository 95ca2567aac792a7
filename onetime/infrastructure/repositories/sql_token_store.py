"""Token store implementation using SQLAlchemy asyncio.

Each method runs in its own short session and commits before returning, so
no transaction is held open between a lookup and the completion that
follows it. Atomicity of completion comes from the database: the
conditional update is a single ``UPDATE ... WHERE id = :id AND completed =
false`` statement and success is read from its row count.

Database errors are logged and re-raised unchanged; retry policy belongs to
the engine configuration or the caller.
"""

from datetime import datetime, timezone
from typing import Optional, Type

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from onetime.domain.entities.token import Token
from onetime.domain.interfaces.infrastructure import IClock
from onetime.domain.interfaces.repositories import ITokenStore
from onetime.domain.value_objects.token_filter import TokenChanges, TokenFilter
from onetime.infrastructure.persistence.models import TokenRecordBase

logger = get_logger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlTokenStore(ITokenStore):
    """SQLAlchemy implementation of ``ITokenStore`` for one token table.

    Args:
        session_factory: Factory for async sessions bound to the database
        model: ``ActivationRecord`` or ``ReminderRecord``
        clock: Supplies ``created_at`` for inserted tokens
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: Type[TokenRecordBase],
        clock: IClock,
    ):
        self._session_factory = session_factory
        self._model = model
        self._clock = clock

        logger.debug("SqlTokenStore initialized", table=model.__tablename__)

    async def insert(self, user_id: int, code: str) -> Token:
        record = self._model(
            user_id=user_id,
            code=code,
            completed=False,
            completed_at=None,
            created_at=self._clock.now(),
        )
        try:
            async with self._session_factory() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
        except Exception as e:
            self._log_error("insert", e, user_id=user_id)
            raise

        logger.debug("Token inserted", table=self._table, token_id=record.id, user_id=user_id)
        return self._to_entity(record)

    async def find_one(self, token_filter: TokenFilter) -> Optional[Token]:
        statement = (
            select(self._model)
            .where(*self._conditions(token_filter))
            .order_by(self._model.id)
            .limit(1)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                record = result.scalars().first()
        except Exception as e:
            self._log_error("find_one", e, user_id=token_filter.user_id)
            raise

        return self._to_entity(record) if record is not None else None

    async def conditional_update(
        self, token_id: int, expected: TokenFilter, changes: TokenChanges
    ) -> bool:
        statement = (
            update(self._model)
            .where(self._model.id == token_id, *self._conditions(expected))
            .values(completed=changes.completed, completed_at=changes.completed_at)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                rowcount = result.rowcount
                await session.commit()
        except Exception as e:
            self._log_error("conditional_update", e, token_id=token_id)
            raise

        return rowcount == 1

    async def delete(self, token_id: int) -> bool:
        statement = (
            delete(self._model)
            .where(self._model.id == token_id)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                rowcount = result.rowcount
                await session.commit()
        except Exception as e:
            self._log_error("delete", e, token_id=token_id)
            raise

        return rowcount > 0

    async def delete_where(self, token_filter: TokenFilter) -> int:
        statement = (
            delete(self._model)
            .where(*self._conditions(token_filter))
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                rowcount = result.rowcount
                await session.commit()
        except Exception as e:
            self._log_error("delete_where", e)
            raise

        logger.debug("Tokens deleted by filter", table=self._table, count=rowcount)
        return rowcount

    @property
    def _table(self) -> str:
        return self._model.__tablename__

    def _conditions(self, token_filter: TokenFilter) -> list:
        model = self._model
        conditions = []
        if token_filter.user_id is not None:
            conditions.append(model.user_id == token_filter.user_id)
        if token_filter.code is not None:
            conditions.append(model.code == token_filter.code)
        if token_filter.completed is not None:
            conditions.append(model.completed == token_filter.completed)
        if token_filter.created_after is not None:
            conditions.append(model.created_at > token_filter.created_after)
        if token_filter.created_at_or_before is not None:
            conditions.append(model.created_at <= token_filter.created_at_or_before)
        return conditions

    def _to_entity(self, record: TokenRecordBase) -> Token:
        return Token(
            id=record.id,
            user_id=record.user_id,
            code=record.code,
            completed=record.completed,
            created_at=_as_utc(record.created_at),
            completed_at=_as_utc(record.completed_at),
        )

    def _log_error(self, operation: str, error: Exception, **context) -> None:
        logger.error(
            "Token store operation failed",
            table=self._table,
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **context,
        )
