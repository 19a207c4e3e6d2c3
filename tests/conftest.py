import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
import hr_training.models  # noqa: F401
from hr_training.core.config import settings
from hr_training.core.database import Base
from hr_training.utils import deps as deps_utils
from hr_training.services.course import course_service
from hr_training.services.enrollment import enrollment_service
from hr_training.services.progress import progress_service
from hr_training.services.quiz_attempt import quiz_attempt_service
from hr_training.services.report import report_service
from tests.helpers.factories import FROZEN_NOW

test_db_url = settings.TEST_DATABASE_URL or "sqlite://"

@pytest.fixture(scope="function")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(test_db_url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        engine = create_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin every clock-driven service to FROZEN_NOW."""
    for service in (course_service, enrollment_service, progress_service, quiz_attempt_service, report_service):
        monkeypatch.setattr(service, "clock", lambda: FROZEN_NOW)
    return FROZEN_NOW

@pytest.fixture(scope="function")
def client(db_session, frozen_clock):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def api_prefix():
    return settings.API_V1_STR
