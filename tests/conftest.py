import os
import tempfile
from datetime import date

_tmp = tempfile.mkdtemp(prefix="workfriar-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = os.path.join(_tmp, "logs")
os.environ["UPLOAD_DIR"] = os.path.join(_tmp, "uploads")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AUTH_MODE"] = "jwt"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from workfriar.database import Base, get_db
from workfriar.models.category import Category
from workfriar.models.project import Project, ProjectTeam, ProjectTeamMember
from workfriar.models.timesheet import Timesheet
from workfriar.models.user import Role, User
from workfriar.services.auth import create_access_token, hash_password


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------- factories ----------

@pytest.fixture
def make_role(db):
    def _make(name: str, department: str = "Technical") -> Role:
        role = db.query(Role).filter(Role.role == name).first()
        if role:
            return role
        role = Role(role=name, department=department)
        db.add(role)
        db.commit()
        db.refresh(role)
        return role

    return _make


@pytest.fixture
def make_user(db, make_role):
    def _make(name: str, role: str | None = "Employee", password: str = "secret123") -> User:
        user = User(
            full_name=name,
            email=f"{name.lower().replace(' ', '.')}@example.com",
            password_hash=hash_password(password),
            role_id=make_role(role).id if role else None,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def category(db):
    cat = Category(category="Development", time_entry="Open Entry")
    db.add(cat)
    db.commit()
    db.refresh(cat)
    return cat


@pytest.fixture
def make_project(db):
    def _make(name: str = "Apollo", lead: User | None = None, members: list[User] = ()) -> Project:
        project = Project(project_name=name, client_name="Acme", project_lead_id=lead.id if lead else None)
        db.add(project)
        db.flush()
        if members:
            project.team = ProjectTeam(
                members=[ProjectTeamMember(user_id=m.id, dates=[{"start_date": "2024-01-01", "end_date": None}]) for m in members]
            )
        db.commit()
        db.refresh(project)
        return project

    return _make


@pytest.fixture
def make_timesheet(db, category):
    def _make(
        user: User,
        project: Project,
        start: date = date(2024, 12, 1),
        end: date = date(2024, 12, 7),
        status: str = "in_progress",
        hours: list[tuple[str, str]] = (("2024-12-02", "8"), ("2024-12-03", "7.5")),
    ) -> Timesheet:
        ts = Timesheet(
            project_id=project.id,
            user_id=user.id,
            task_category_id=category.id,
            task_detail="Build things",
            start_date=start,
            end_date=end,
            data_sheet=[{"date": d, "isHoliday": False, "hours": h} for d, h in hours],
            status=status,
        )
        db.add(ts)
        db.commit()
        db.refresh(ts)
        return ts

    return _make


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def headers():
    return auth_headers
