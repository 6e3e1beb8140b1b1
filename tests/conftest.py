from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any, Awaitable, Callable

# el entorno tiene que estar listo antes de importar app.* (settings se lee al importar)
_DB_PATH = Path(tempfile.mkdtemp(prefix="healthbridge-tests-")) / "test.sqlite"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from app.core.db import SessionLocal, create_all, drop_all
from app.core.security import create_access_token
from app.models.doctor import Doctor
from app.models.profile import Profile

DOCTOR_ID = "doctor-1"
PATIENT_ID = "patient-1"


@pytest.fixture(autouse=True)
def schema():
    asyncio.run(create_all())
    yield
    asyncio.run(drop_all())


@pytest.fixture
def run_db() -> Callable[[Callable[[Any], Awaitable[Any]]], Any]:
    """Corre `fn(session)` en una sesión nueva y devuelve su resultado."""
    def _run(fn):
        async def _inner():
            async with SessionLocal() as session:
                return await fn(session)
        return asyncio.run(_inner())

    return _run


@pytest.fixture
def seed(run_db):
    def _seed(*objs):
        async def _add(session):
            session.add_all(objs)
            await session.commit()
        run_db(_add)
        return objs

    return _seed


@pytest.fixture
def doctor(seed) -> Doctor:
    seed(
        Profile(id=DOCTOR_ID, first_name="Meera", last_name="Rao", is_doctor=True),
        Doctor(
            id=DOCTOR_ID,
            name="Dr. Meera Rao",
            email="meera@example.com",
            specialization="Cardiology",
            hospital="City Hospital",
            region="Delhi",
            address="Connaught Place, New Delhi",
            latitude=28.6315,
            longitude=77.2167,
            verified=True,
            available=True,
        ),
    )
    return DOCTOR_ID


@pytest.fixture
def patient(seed) -> str:
    seed(Profile(id=PATIENT_ID, first_name="Ana", last_name="Pérez", city="Mumbai"))
    return PATIENT_ID


@pytest.fixture
def client():
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    def _make(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _make
