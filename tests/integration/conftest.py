from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from rpos.api.main import create_app
from rpos.application.use_cases.seed_menu import SeedMenu
from rpos.infrastructure.db.models.user import UserModel
from rpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from rpos.infrastructure.db.schema import create_schema
from rpos.infrastructure.db.session import build_engine

TEST_USER_ID = "u1"


@pytest.fixture(scope="session", autouse=True)
def integration_environment() -> Iterator[None]:
    os.environ["APP_ENV"] = "test"
    os.environ.setdefault("OTEL_SERVICE_NAME", "rpos-backend-test")
    os.environ["OTEL_EXPORTER_OTLP_ENDPOINT"] = ""
    os.environ["SEED_MENU_ON_STARTUP"] = "false"
    yield


@pytest.fixture()
def engine(tmp_path: Path) -> Iterator[Engine]:
    engine = build_engine(f"sqlite:///{tmp_path / 'rpos.db'}")
    create_schema(engine)
    SeedMenu(SqlAlchemyMenuRepository(engine)).execute()
    with Session(engine) as session:
        session.add(
            UserModel(id=TEST_USER_ID, username="asha", email="asha@example.com", phone="9999999999")
        )
        session.commit()
    yield engine
    engine.dispose()


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    with TestClient(create_app(engine=engine)) as test_client:
        yield test_client


@pytest.fixture()
def count_rows(engine: Engine) -> Callable[[type], int]:
    def _count(model: type) -> int:
        with Session(engine) as session:
            return session.scalar(select(func.count()).select_from(model)) or 0

    return _count
