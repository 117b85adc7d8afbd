"""测试夹具：为 pytest 提供数据库与客户端的共享配置。"""

import os
import tempfile
from typing import Generator

os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "backoffice-test-logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from backoffice.core import cache
from backoffice.core.dependencies import get_db
from backoffice.core.security import get_password_hash
from backoffice.db import session as db_session
from backoffice.db.init_db import init_db
from backoffice.main import app
from backoffice.models.admin import Admin
from backoffice.models.base import Base

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    Base.metadata.create_all(bind=engine)
    init_db()
    yield

    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture(autouse=True)
def reset_cache() -> Generator[None, None, None]:
    cache.reset_backend()
    yield
    cache.reset_backend()


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session_fixture):
    """构建 FastAPI TestClient，并注入测试专用的数据库依赖。"""

    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def make_admin(db_session_fixture):
    """按需创建指定权限等级的管理员账号，已存在时直接复用。"""

    def _make_admin(username: str, password: str, *, authority: int, is_active: bool = True) -> Admin:
        admin = db_session_fixture.query(Admin).filter(Admin.username == username).first()
        if admin is None:
            admin = Admin(
                username=username,
                hashed_password=get_password_hash(password),
                name=username,
                authority=authority,
                is_active=is_active,
            )
            db_session_fixture.add(admin)
            db_session_fixture.commit()
            db_session_fixture.refresh(admin)
        return admin

    return _make_admin
