"""Shared fixtures: in-memory SQLite app, Supabase-style tokens, fake provisioning executor."""

import os
import re
import time
import uuid

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["MIGRATION_STEP_DELAY"] = "0"
os.environ.pop("MONITORING_REPORTING_ENDPOINT", None)

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from crystal_calendar import cache as cache_module
from crystal_calendar import rate_limiter
from crystal_calendar.database import Base, SessionLocal, engine, get_db
from crystal_calendar.domain.monitoring.collector import monitoring
from crystal_calendar.domain.provisioning import sql_scripts
from crystal_calendar.domain.provisioning.exceptions import SQLExecutionError
from crystal_calendar.domain.provisioning.executor import step_result
from crystal_calendar.domain.provisioning.router import get_executor
from crystal_calendar.main import app

JWT_SECRET = "test-jwt-secret"


class FakeExecutor:
    """In-memory stand-in for SQLExecutor that records what it is asked to do."""

    mode = "rpc"

    def __init__(self):
        self.tables = set(sql_scripts.REQUIRED_TABLES)
        self.columns = {("profiles", "enhanced_assessment")}
        self.foreign_keys = set()
        self.rls_blocked = False
        self.sql_fails = False
        self.failing_steps = set()
        self.executed = []
        self.steps = []
        self.crystals = []

    def exec_sql(self, sql):
        if self.sql_fails:
            raise SQLExecutionError("permission denied for schema public")
        self.executed.append(sql)
        constraint = re.search(r"ADD CONSTRAINT (\w+)", sql)
        if constraint:
            self.foreign_keys.add(constraint.group(1))

    def run_step(self, sql, description, probe=None):
        self.steps.append(description)
        if description in self.failing_steps:
            return step_result(description, False, "Manual execution required in the SQL editor: ...")
        return step_result(description, True)

    def table_exists(self, table):
        return table in self.tables

    def column_exists(self, table, column):
        return (table, column) in self.columns

    def rls_blocks_access(self, table="profiles"):
        return self.rls_blocked

    def foreign_key_exists(self, constraint_name, table):
        return constraint_name in self.foreign_keys

    def upsert_crystals(self, rows):
        if self.sql_fails:
            raise SQLExecutionError("permission denied for table crystals")
        self.crystals.extend(rows)


def make_token(role="authenticated", sub=None, email="user@example.com", expires_in=3600, **claims):
    now = int(time.time())
    payload = {"role": role, "iat": now, "exp": now + expires_in}
    if role != "service_role":
        payload.update({"sub": sub or str(uuid.uuid4()), "email": email, "aud": "authenticated"})
    payload.update(claims)
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Redis is unreachable in tests; cache and rate limiter degrade to memory."""

    def unavailable():
        raise ConnectionError("Redis disabled in tests")

    monkeypatch.setattr(rate_limiter, "get_redis_client", unavailable)
    monkeypatch.setattr(cache_module, "get_redis_client", unavailable)
    monkeypatch.setattr(cache_module.cache, "redis_client", None)
    rate_limiter.memory_cache.clear()
    yield


@pytest.fixture(autouse=True)
def clean_monitoring():
    monitoring.clear()
    monitoring.enable()
    yield
    monitoring.clear()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def client(db, fake_executor):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_executor] = lambda: fake_executor
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def user_headers(user_id):
    return {"Authorization": f"Bearer {make_token(sub=user_id)}"}


@pytest.fixture
def service_headers():
    return {"Authorization": f"Bearer {make_token(role='service_role')}"}


class FakeRedis:
    """Dict-backed stand-in for the Redis calls the cache makes"""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl


@pytest.fixture
def fake_redis(monkeypatch):
    client = FakeRedis()
    monkeypatch.setattr(cache_module.cache, "redis_client", client)
    return client
