"""Test configuration and fixtures for the Course Library MCP Server.

1. Isolated test databases - each test gets a clean SQLite file
2. Configuration isolation - the global config is reset around every test
3. Session patching - handlers run against the test session
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from course_library_mcp.config import ServerConfig, reset_config
from course_library_mcp.database.schema import Author, Base, Course
from course_library_mcp.property_mappings import build_property_mapping_registry
from course_library_mcp.shaping import PropertyMappingRegistry

# Modules that open their own session_scope()
SESSION_SCOPE_USERS = [
    "course_library_mcp.resources.authors",
    "course_library_mcp.resources.courses",
    "course_library_mcp.resources.author_collections",
    "course_library_mcp.tools.authors",
    "course_library_mcp.tools.courses",
]


# === Configuration Fixtures ===


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Run every test without COURSE_LIBRARY_* variables and with a fresh config."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("COURSE_LIBRARY_"):
            del os.environ[key]
    reset_config()

    yield

    os.environ.clear()
    os.environ.update(original_env)
    reset_config()


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for each test."""
    return tmp_path / "test_course_library.db"


@pytest.fixture
def test_config(test_db_path: Path) -> ServerConfig:
    """Provide a test-specific server configuration."""
    return ServerConfig(
        server_name="test-course-library",
        server_version="0.0.1-test",
        database_path=test_db_path,
        debug=True,
        log_level="DEBUG",
    )


# === Database Fixtures ===


@pytest.fixture
def test_db_session(test_db_path: Path) -> Generator[Session, None, None]:
    """Provide a SQLAlchemy session on a fresh schema."""
    engine = create_engine(
        f"sqlite:///{test_db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)

    session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = session_local()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def mock_session_scope(test_db_session: Session, monkeypatch) -> Session:
    """Make resource and tool handlers use the test session."""

    @contextmanager
    def _mock_session_scope():
        yield test_db_session

    for module in SESSION_SCOPE_USERS:
        monkeypatch.setattr(f"{module}.session_scope", _mock_session_scope)

    return test_db_session


@pytest.fixture
def property_mappings() -> PropertyMappingRegistry:
    """The frozen registry the server builds at start-up."""
    return build_property_mapping_registry()


# === Test Data Fixtures ===


def _add_author(
    session: Session,
    first_name: str,
    last_name: str,
    date_of_birth: date,
    main_category: str,
    date_of_death: date | None = None,
    courses: list[tuple[str, str]] | None = None,
) -> Author:
    """Insert an author (and courses) and return the flushed row."""
    author = Author(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        date_of_death=date_of_death,
        main_category=main_category,
    )
    author.courses = [
        Course(title=title, description=description) for title, description in courses or []
    ]
    session.add(author)
    session.flush()
    return author


@pytest.fixture
def author_factory(test_db_session: Session):
    """Callable adding an author to the test database."""

    def _factory(*args, **kwargs) -> Author:
        return _add_author(test_db_session, *args, **kwargs)

    return _factory


@pytest.fixture
def sample_authors(test_db_session: Session) -> list[Author]:
    """Five authors with distinct names and birth dates, two of them deceased."""
    authors = [
        _add_author(
            test_db_session,
            "Berry",
            "Griffin Beak Eldritch",
            date(1650, 7, 23),
            "Ships",
            date_of_death=date(1700, 1, 1),
            courses=[
                ("Commandeering a Ship", "Without getting caught."),
                ("Overthrowing Mutiny", "Tips to avoid, or overthrow, pirate mutiny."),
            ],
        ),
        _add_author(
            test_db_session,
            "Nancy",
            "Swashbuckler Rye",
            date(1668, 5, 21),
            "Rum",
            date_of_death=date(1720, 6, 1),
        ),
        _add_author(test_db_session, "Eli", "Ivory Bones Sweet", date(1971, 12, 16), "Singing"),
        _add_author(test_db_session, "Arnold", "The Unseen Stafford", date(1982, 3, 6), "Singing"),
        _add_author(test_db_session, "Seabury", "Toxic Reyson", date(1990, 11, 23), "Maps"),
    ]
    test_db_session.commit()
    return authors
