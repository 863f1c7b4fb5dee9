"""Test configuration and fixtures"""

import pytest
import tempfile
import shutil
import os
from pathlib import Path
from sqlalchemy.orm import sessionmaker

from taskboard.models import Base, User, UserRole
from taskboard.storage.database import build_engine, reset_database_globals

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation"""
    temp_dir = tempfile.mkdtemp()
    original_cwd = os.getcwd()
    os.chdir(temp_dir)

    yield Path(temp_dir)

    os.chdir(original_cwd)
    reset_database_globals()
    shutil.rmtree(temp_dir, ignore_errors=True)

@pytest.fixture
def clean_taskboard_dir(temp_dir):
    """Ensure clean .taskboard directory for each test"""
    taskboard_dir = temp_dir / ".taskboard"
    if taskboard_dir.exists():
        shutil.rmtree(taskboard_dir)
    return taskboard_dir

@pytest.fixture
def empty_database(temp_dir):
    """Create an empty SQLite database"""
    taskboard_dir = temp_dir / ".taskboard"
    taskboard_dir.mkdir(exist_ok=True)

    db_path = taskboard_dir / "database.db"
    # Create empty database file
    db_path.touch()

    return db_path

@pytest.fixture
def test_engine(temp_dir):
    """Create a test database engine with the production locking setup"""
    taskboard_dir = temp_dir / ".taskboard"
    taskboard_dir.mkdir(exist_ok=True)

    db_url = f"sqlite:///{taskboard_dir}/database.db"
    engine = build_engine(db_url)

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine, as the services use it"""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=test_engine)

@pytest.fixture
def test_session(session_factory):
    """Create a test database session"""
    session = session_factory()

    yield session

    session.rollback()
    session.close()

def make_user(session_factory, user_id, role=UserRole.USER):
    """Insert a user directly and return its id"""
    with session_factory() as session:
        session.add(User(id=user_id, name=user_id, email=f"{user_id}@example.com", role=role))
        session.commit()
    return user_id

@pytest.fixture
def owner(session_factory):
    return make_user(session_factory, "owner")

@pytest.fixture
def member(session_factory):
    return make_user(session_factory, "member")

@pytest.fixture
def outsider(session_factory):
    return make_user(session_factory, "outsider")

@pytest.fixture
def admin(session_factory):
    return make_user(session_factory, "admin", role=UserRole.ADMIN)
