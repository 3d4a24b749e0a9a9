import time
from contextvars import ContextVar
from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session as SqlAlchemySession
from sqlalchemy.pool import NullPool, StaticPool

from salesdesk import settings


class DatabaseMode(Enum):
    READ_WRITE = 'read_write'
    READ_ONLY = 'read_only'


def get_database_url(host: str, url: str | None = None) -> URL:
    if url:
        return make_url(url)

    return URL.create(
        drivername='postgresql',
        username=settings.DB_USER,
        password=settings.DB_PASSWORD,
        host=host,
        port=settings.DB_PORT,
        database=settings.DB_NAME,
    )


def create_db_engine(database_url: URL, mode: DatabaseMode = DatabaseMode.READ_WRITE) -> Engine:
    if database_url.get_backend_name() == 'sqlite':
        # An in-memory database only exists on its connection, everyone shares it
        return create_engine(database_url, poolclass=StaticPool, connect_args={'check_same_thread': False})

    execution_options = {}
    if mode == DatabaseMode.READ_ONLY:
        # All counters of one request are computed from the same snapshot
        execution_options['isolation_level'] = 'REPEATABLE READ'

    return create_engine(
        database_url,
        poolclass=NullPool,
        connect_args={
            'options': f'-c timezone=utc -c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}',
            'connect_timeout': 10,
        },
        pool_pre_ping=True,
        execution_options=execution_options,
    )


def _create_read_only_engine(rw_engine: Engine) -> Engine:
    ro_url = get_database_url(settings.DB_HOST_RO, settings.DATABASE_URL_RO)
    if rw_engine.dialect.name == 'sqlite' and ro_url == rw_engine.url:
        return rw_engine
    return create_db_engine(ro_url, mode=DatabaseMode.READ_ONLY)


_rw_engine = create_db_engine(get_database_url(settings.DB_HOST, settings.DATABASE_URL))
_ro_engine = _create_read_only_engine(_rw_engine)

_session_makers = {
    DatabaseMode.READ_WRITE: sessionmaker(autoflush=False, bind=_rw_engine),
    DatabaseMode.READ_ONLY: sessionmaker(autoflush=False, bind=_ro_engine),
}

if settings.DB_LOG_STATEMENTS:

    @event.listens_for(Engine, 'before_cursor_execute')
    def before_cursor_execute(
        conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool
    ) -> None:
        conn.info.setdefault('query_start_time', []).append(time.perf_counter())
        logger.debug(f'Start Query: {statement}', parameters=parameters)

    @event.listens_for(Engine, 'after_cursor_execute')
    def after_cursor_execute(
        conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool
    ) -> None:
        elapsed = time.perf_counter() - conn.info['query_start_time'].pop(-1)
        logger.debug(f'Query Time: {elapsed:.4f}s')


# Thread and coroutine local
_session_storage: ContextVar[SqlAlchemySession | None] = ContextVar('_session_storage', default=None)
_session_mode: ContextVar[DatabaseMode] = ContextVar('_session_mode', default=DatabaseMode.READ_WRITE)


def get_engine(mode: DatabaseMode = DatabaseMode.READ_WRITE) -> Engine:
    return _rw_engine if mode == DatabaseMode.READ_WRITE else _ro_engine


class SessionNotAvailable(Exception):
    def __init__(self) -> None:
        super().__init__(
            'No session in this context. Outside a request open one yourself:\n'
            '    with db():\n'
            '        db.session.execute(select(User))'
        )


class ReadOnlyViolation(RuntimeError): ...


def _prevent_write_on_readonly(session: SqlAlchemySession, *args: Any, **kwargs: Any) -> None:
    if session.new or session.deleted or session.dirty:
        raise ReadOnlyViolation('Cannot modify database in read-only mode')


class SessionManagerMeta(type):
    """
    Exposes the current session on the class so callers never instantiate
    """

    @property
    def session(self) -> SqlAlchemySession:
        session = _session_storage.get()
        if session is None:
            raise SessionNotAvailable
        return session

    @property
    def mode(self) -> DatabaseMode:
        return _session_mode.get()


class SessionManager(metaclass=SessionManagerMeta):
    """
    Context manager owning one session for the current context. Nested managers
    reuse the outer session (tests rely on this to see their own rows) and
    only the manager that opened a session ends its transaction.
    """

    def __init__(
        self,
        session_kwargs: Dict[str, Any] | None = None,
        commit_on_success: bool = False,
        mode: DatabaseMode = DatabaseMode.READ_WRITE,
    ):
        self.session_kwargs = session_kwargs or {}
        self.commit_on_success = commit_on_success
        self.mode = mode
        self.session_token: Optional[Any] = None
        self.mode_token: Optional[Any] = None
        self._write_guard: Optional[SqlAlchemySession] = None

    def _open_session(self) -> SqlAlchemySession:
        session = _session_makers[self.mode](**self.session_kwargs)
        self.session_token = _session_storage.set(session)
        return session

    def _guard(self, session: SqlAlchemySession) -> None:
        event.listen(session, 'before_flush', _prevent_write_on_readonly)
        self._write_guard = session

    def enter(self) -> Any:
        self.mode_token = _session_mode.set(self.mode)

        session = _session_storage.get()
        if session is None:
            session = self._open_session()

        if self.mode == DatabaseMode.READ_ONLY:
            self._guard(session)

        return type(self)

    def cleanup(self) -> None:
        if self._write_guard is not None:
            event.remove(self._write_guard, 'before_flush', _prevent_write_on_readonly)
            self._write_guard = None
        if self.session_token:
            session = _session_storage.get()
            if session is not None:
                session.close()
            _session_storage.reset(self.session_token)
            self.session_token = None
        if self.mode_token:
            _session_mode.reset(self.mode_token)
            self.mode_token = None

    def __enter__(self) -> Any:
        return self.enter()

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        session = _session_storage.get()
        if session is not None and self.session_token:
            if self.commit_on_success and exc_type is None and _session_mode.get() == DatabaseMode.READ_WRITE:
                session.commit()
            else:
                session.rollback()

        self.cleanup()


# This is what external callers should access!
db: SessionManagerMeta = SessionManager


class ReadOnlySession(SessionManager):
    """
    Always opens its own read-only session, even inside another session.

    Usage:
    with ReadOnlySession() as session:
        session.execute(select(Account)).all()
    """

    def __init__(self, session_kwargs: Dict[str, Any] | None = None) -> None:
        super().__init__(session_kwargs=session_kwargs, commit_on_success=False, mode=DatabaseMode.READ_ONLY)

    def enter(self) -> Any:
        self.mode_token = _session_mode.set(self.mode)
        session = self._open_session()
        self._guard(session)
        return session
