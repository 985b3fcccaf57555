import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import app.models  # noqa

from app.core.config import Settings
from app.db.base import Base
from app.models.enums import ProjectState
from app.models.project import Project
from app.policies.rbac import Viewer
from app.schemas.projects import Integration, ProjectSnapshot, Reward, UserRecord

OWNER_ID = 10
STRANGER_ID = 20
ADMIN_ID = 1


@pytest.fixture(scope="function")
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def owner():
    return Viewer(id=OWNER_ID)


@pytest.fixture
def stranger():
    return Viewer(id=STRANGER_ID)


@pytest.fixture
def admin():
    return Viewer(id=ADMIN_ID, is_admin=True)


def make_project(state=ProjectState.draft, **overrides) -> ProjectSnapshot:
    fields = dict(
        id=99,
        user_id=OWNER_ID,
        state=state,
        service_fee=0.13,
        attribute_names=tuple(Project.attribute_names()),
        user=UserRecord(id=OWNER_ID, attribute_names=("id", "name", "email", "admin")),
        rewards=(Reward(id=1, description="thanks", minimum_value=10),),
    )
    fields.update(overrides)
    return ProjectSnapshot(**fields)


def solidarity(name="SOLIDARITY_SERVICE_FEE"):
    return Integration(name=name, data={"name": "Solidarity"})
