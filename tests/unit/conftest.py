# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离的环境变量, 以及基于内存 SQLite 的 app/client fixtures.
"""

import pytest

from formloom import create_app, db
from formloom.settings import Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部数据库等基础设施
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.delenv("NAMESPACE_PROVISIONING_ENABLED", raising=False)
    monkeypatch.delenv("SUBMISSION_LIST_LIMIT", raising=False)


@pytest.fixture(scope="function")
def app(_unit_test_env):
    """创建测试应用实例(每个用例独立的内存数据库)."""
    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()


@pytest.fixture(scope="function")
def app_context(app):
    """推入应用上下文, 用例结束后回滚未提交的变更."""
    with app.app_context():
        yield app
        db.session.rollback()
