"""
Pytest configuration for the ferreteria API tests.

Settings are read at import time, so the environment is prepared before
anything under `ferreteria` is imported.
"""
import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="ferreteria-tests-"))

os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP / 'test.db'}")
os.environ.setdefault("SESSION_SECRET", "test-secret-key-for-sessions")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "clave-de-prueba")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DISPLAY_TZ", "America/Caracas")
os.environ.setdefault("HISTORY_API_URL", "http://inventario.test/api")

import asyncio
from typing import Any, Callable, Dict, List
from zoneinfo import ZoneInfo

import httpx
import pytest

from ferreteria.storage.database import async_session, create_all, engine
from ferreteria.v1_0.clients import HistoryClient
from ferreteria.v1_0.helper.history import normalize_movements
from ferreteria.v1_0.models import Base
from ferreteria.v1_0.services import HistoryService

TZ = ZoneInfo("America/Caracas")
ADMIN = {"username": "admin", "password": "clave-de-prueba"}


def raw_movement(i: int, **overrides: Any) -> Dict[str, Any]:
    """One record as the inventory endpoint serves it."""
    record = {
        "nombreProducto": f"Producto {i}",
        "codigoProducto": f"COD-{i:03d}",
        "cantidad": i,
        "stockAnterior": 100,
        "stockNuevo": 100 + i,
        "costoFinal": 2.5,
        "fecha": f"2024-01-{(i % 28) + 1:02d}T10:00:00",
        "operacion": "entrada",
    }
    record.update(overrides)
    return record


def upstream(payload: Any, status_code: int = 200, seen: List[httpx.Request] | None = None):
    """MockTransport answering every request with `payload`."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def history_service_for(transport: httpx.MockTransport, **kwargs: Any) -> HistoryService:
    client = HistoryClient(base_url="http://inventario.test/api", transport=transport)
    return HistoryService(client, tz_name="America/Caracas", **kwargs)


class StubClient:
    """Stands in for HistoryClient; returns a fixed list and records the queries."""

    def __init__(self, items: List[Dict[str, Any]] | None = None, error: Exception | None = None):
        self.items = list(items or [])
        self.error = error
        self.queries: List[Any] = []

    async def fetch_page(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.items)


class GatedClient:
    """Each fetch waits on its own future, so tests decide the answer order."""

    def __init__(self):
        self.calls: List[tuple] = []

    async def fetch_page(self, query):
        fut = asyncio.get_running_loop().create_future()
        self.calls.append((query, fut))
        return await fut

    async def wait_for_calls(self, n: int) -> None:
        for _ in range(200):
            if len(self.calls) >= n:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {n} fetches, saw {len(self.calls)}")


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def make_raw() -> Callable[..., Dict[str, Any]]:
    return raw_movement


@pytest.fixture
def movements():
    """25 normalized entries, quantity 1..25."""
    return normalize_movements([raw_movement(i) for i in range(1, 26)], TZ)


@pytest.fixture
async def db():
    """Fresh tables and a session per test."""
    await create_all()
    async with async_session() as session:
        yield session
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def app():
    from ferreteria.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
def client(app):
    """TestClient with tables created by the lifespan and dropped afterwards."""
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c

    async def _drop():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    asyncio.run(_drop())


@pytest.fixture
def auth_client(client):
    """Client holding an admin session cookie."""
    r = client.post("/api/auth/login", json=ADMIN)
    assert r.status_code == 200
    return client
