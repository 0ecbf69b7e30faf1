from __future__ import annotations

import random
from typing import Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from parceltrack.infrastructure.database import build_engine, build_session_factory, create_schema
from parceltrack.infrastructure.repositories.parcel_repository_impl import ParcelRepositoryImpl


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """Fresh in-memory database with the parcel table for every test."""
    eng = build_engine("sqlite+pysqlite:///:memory:")
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def db(engine: Engine) -> Iterator[Session]:
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db: Session) -> ParcelRepositoryImpl:
    return ParcelRepositoryImpl(db)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(20240501)
