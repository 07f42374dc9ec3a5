"""SQLAlchemy 엔진/세션 및 트랜잭션 헬퍼를 제공합니다."""

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from blog_history.config import settings

Base = declarative_base()


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """SQLite는 커넥션마다 FK 검사를 켜야 ON DELETE CASCADE가 동작한다."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def configure_sqlite(engine: Engine) -> Engine:
    """FK 검사에 더해 SAVEPOINT가 바깥 트랜잭션 안에서 동작하도록 BEGIN을 직접 발행한다.

    BEGIN IMMEDIATE로 시작 시점에 쓰기 잠금을 잡아, 같은 게시글을 동시에 저장하는
    트랜잭션이 "database is locked"로 실패하지 않고 busy timeout 동안 차례를 기다린다.
    """
    enable_sqlite_foreign_keys(engine)

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": settings.DB_TIMEOUT_SECONDS},
        )
        return configure_sqlite(engine)
    return create_engine(url, pool_pre_ping=True)


engine = _build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session):
    """블록 전체를 하나의 트랜잭션으로 실행한다. 예외가 나면 부분 반영 없이 롤백한다."""
    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
