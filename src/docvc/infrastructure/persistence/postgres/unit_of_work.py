"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import psycopg
from psycopg import IsolationLevel
from psycopg_pool import ConnectionPool, PoolTimeout

from docvc.domain.exceptions import StorageUnavailable
from docvc.infrastructure.persistence.postgres.branch_repository import (
    PostgresBranchRepository,
)
from docvc.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from docvc.infrastructure.persistence.postgres.tag_repository import (
    PostgresTagRepository,
)
from docvc.infrastructure.persistence.postgres.version_repository import (
    PostgresVersionRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction.

    Writers run at READ COMMITTED and serialize on the document row
    (``SELECT ... FOR UPDATE``). Read-only units run at REPEATABLE READ so
    every query in the unit sees the same snapshot.
    """

    def __init__(self, pool: ConnectionPool, read_only: bool = False) -> None:
        self._pool = pool
        self._read_only = read_only
        self._conn: psycopg.Connection | None = None
        self._conn_cm: object | None = None

    def __enter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = self._conn_cm.__enter__()
        if self._read_only:
            self._conn.isolation_level = IsolationLevel.REPEATABLE_READ
            self._conn.read_only = True
        else:
            self._conn.isolation_level = IsolationLevel.READ_COMMITTED
            self._conn.read_only = False
        self._documents = PostgresDocumentRepository(self._conn)
        self._versions = PostgresVersionRepository(self._conn)
        self._branches = PostgresBranchRepository(self._conn)
        self._tags = PostgresTagRepository(self._conn)
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            self._conn.rollback()
        if self._conn_cm:
            self._conn_cm.__exit__(exc_type, exc_val, exc_tb)

    @property
    def documents(self) -> PostgresDocumentRepository:
        return self._documents

    @property
    def versions(self) -> PostgresVersionRepository:
        return self._versions

    @property
    def branches(self) -> PostgresBranchRepository:
        return self._branches

    @property
    def tags(self) -> PostgresTagRepository:
        return self._tags

    def commit(self) -> None:
        if self._conn:
            self._conn.commit()

    def rollback(self) -> None:
        if self._conn:
            self._conn.rollback()


def create_uow_factory(pool: ConnectionPool) -> object:
    """Create UnitOfWork factory (context manager).

    Pool checkout timeouts and lost connections surface as StorageUnavailable.
    """

    @contextmanager
    def factory(read_only: bool = False) -> Iterator[PostgresUnitOfWork]:
        try:
            with PostgresUnitOfWork(pool, read_only=read_only) as uow:
                try:
                    yield uow
                    uow.commit()
                except BaseException:
                    uow.rollback()
                    raise
        except (PoolTimeout, psycopg.OperationalError) as e:
            logger.warning("Storage unavailable", extra={"error": str(e)})
            raise StorageUnavailable(str(e) or "Storage unavailable") from e

    return factory
