"""
SQLAlchemy database schema for the Course Library MCP Server.

Two tables back the catalog:
- authors: people who teach courses
- courses: courses belonging to exactly one author

Public resources (``models/``) never expose these rows directly. Column names
here are the *storage* names that property mappings translate to, e.g. the
public ``name`` field sorts by ``first_name`` then ``last_name``.
"""

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    String,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship, validates

# Base class for all SQLAlchemy models
Base = declarative_base()


class Author(Base):
    """
    Authors table - stores the people behind the courses.

    MCP Usage:
    - Resource: library://authors, library://authors/{id}
    - Relationships: One-to-many with courses
    """

    __tablename__ = "authors"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    date_of_death = Column(Date, nullable=True)
    main_category = Column(String(50), nullable=False)

    courses = relationship(
        "Course",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Course.title",
    )

    __table_args__ = (
        Index("idx_author_name", "last_name", "first_name"),
        Index("idx_author_main_category", "main_category"),
    )

    @validates("date_of_death")
    def validate_date_of_death(self, key, value):  # noqa: ARG002
        """Ensure date of death is not before date of birth."""
        if value and self.date_of_birth and value < self.date_of_birth:
            raise ValueError("Date of death cannot be before date of birth")
        return value

    def __repr__(self) -> str:
        return f"<Author {self.id} {self.first_name} {self.last_name}>"


class Course(Base):
    """
    Courses table - every course is taught by one author.

    MCP Usage:
    - Resource: library://authors/{id}/courses, library://authors/{id}/courses/{course_id}
    - Tools: create/update/delete course for author
    """

    __tablename__ = "courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(100), nullable=False)
    description = Column(String(1500), nullable=True)
    author_id = Column(Uuid, ForeignKey("authors.id", ondelete="CASCADE"), nullable=False)

    author = relationship("Author", back_populates="courses")

    __table_args__ = (
        Index("idx_course_author", "author_id"),
        CheckConstraint("length(title) > 0", name="check_course_title_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Course {self.id} {self.title!r}>"
