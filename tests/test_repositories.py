"""
Tests for the author and course repositories.

These tests run against a real SQLite database so filtering, searching,
mapped sorting and paging are exercised end to end.
"""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from course_library_mcp.database import (
    AuthorRepository,
    Course,
    CourseRepository,
    PaginationParams,
)
from course_library_mcp.models.author import (
    AuthorForCreationDto,
    AuthorForCreationWithDateOfDeathDto,
)
from course_library_mcp.models.course import CourseForCreationDto, CourseForUpdateDto
from course_library_mcp.models.links import AuthorsResourceParameters
from course_library_mcp.shaping import InvalidOrderByError


@pytest.fixture
def author_repo(test_db_session, property_mappings):
    return AuthorRepository(test_db_session, property_mappings)


@pytest.fixture
def course_repo(test_db_session):
    return CourseRepository(test_db_session)


def first_names(page):
    return [author.name.split()[0] for author in page.items]


# =============================================================================
# PAGINATION
# =============================================================================


class TestPaginationParams:
    def test_offset(self):
        assert PaginationParams(page=3, page_size=10).offset == 20

    @pytest.mark.parametrize(("page", "page_size"), [(0, 10), (1, 0), (1, 101)])
    def test_invalid(self, page, page_size):
        with pytest.raises(ValueError):
            PaginationParams(page=page, page_size=page_size).validate_params()


# =============================================================================
# AUTHOR COLLECTION READS
# =============================================================================


class TestGetAuthors:
    """Test filtering, searching, sorting and paging the author collection."""

    def test_default_sort_is_by_name(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters())
        assert first_names(page) == ["Arnold", "Berry", "Eli", "Nancy", "Seabury"]
        assert page.total == 5
        assert page.has_next is False
        assert page.has_previous is False

    def test_filter_by_main_category(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters(main_category="Singing"))
        assert first_names(page) == ["Arnold", "Eli"]
        assert page.total == 2

    def test_filter_is_exact(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters(main_category="Sing"))
        assert page.items == []
        assert page.total == 0

    def test_search_matches_names_and_category(self, author_repo, sample_authors):
        by_name = author_repo.get_authors(AuthorsResourceParameters(search_query="rye"))
        assert first_names(by_name) == ["Nancy"]

        by_category = author_repo.get_authors(AuthorsResourceParameters(search_query="MAP"))
        assert first_names(by_category) == ["Seabury"]

    def test_filter_and_search_combine(self, author_repo, sample_authors):
        page = author_repo.get_authors(
            AuthorsResourceParameters(main_category="Singing", search_query="unseen")
        )
        assert first_names(page) == ["Arnold"]

    def test_sort_by_age(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters(order_by="age"))
        assert first_names(page) == ["Seabury", "Arnold", "Eli", "Nancy", "Berry"]

    def test_no_order_by(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters(order_by=None))
        assert page.total == 5

    def test_unknown_order_by_field(self, author_repo, sample_authors):
        with pytest.raises(InvalidOrderByError):
            author_repo.get_authors(AuthorsResourceParameters(order_by="dateOfBirth"))

    def test_paging(self, author_repo, sample_authors):
        first = author_repo.get_authors(AuthorsResourceParameters(page_size=2))
        assert first_names(first) == ["Arnold", "Berry"]
        assert first.total_pages == 3
        assert first.has_next is True
        assert first.has_previous is False

        last = author_repo.get_authors(AuthorsResourceParameters(page_size=2, page_number=3))
        assert first_names(last) == ["Seabury"]
        assert last.has_next is False
        assert last.has_previous is True

    def test_page_past_the_end(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters(page_number=9))
        assert page.items == []
        assert page.total == 5

    def test_pagination_metadata(self, author_repo, sample_authors):
        page = author_repo.get_authors(AuthorsResourceParameters(page_size=2, page_number=2))
        assert page.pagination_metadata() == {
            "totalCount": 5,
            "pageSize": 2,
            "currentPage": 2,
            "totalPages": 3,
        }

    def test_empty_database(self, author_repo):
        page = author_repo.get_authors(AuthorsResourceParameters())
        assert page.items == []
        assert page.total_pages == 0


# =============================================================================
# SINGLE AUTHOR READS
# =============================================================================


class TestGetAuthor:
    def test_friendly(self, author_repo, sample_authors):
        berry = sample_authors[0]
        author = author_repo.get_author(berry.id)
        assert author.name == "Berry Griffin Beak Eldritch"
        assert author.age == 49
        assert author.main_category == "Ships"

    def test_full(self, author_repo, sample_authors):
        author = author_repo.get_author_full(sample_authors[2].id)
        assert author.first_name == "Eli"
        assert author.last_name == "Ivory Bones Sweet"
        assert author.date_of_birth == date(1971, 12, 16)

    def test_missing(self, author_repo, sample_authors):
        assert author_repo.get_author(uuid4()) is None
        assert author_repo.get_author_full(uuid4()) is None

    def test_by_ids_keeps_requested_order_and_skips_missing(self, author_repo, sample_authors):
        ids = [sample_authors[3].id, uuid4(), sample_authors[0].id]
        authors = author_repo.get_authors_by_ids(ids)
        assert [a.id for a in authors] == [sample_authors[3].id, sample_authors[0].id]

    def test_by_ids_empty(self, author_repo):
        assert author_repo.get_authors_by_ids([]) == []


# =============================================================================
# AUTHOR CREATION
# =============================================================================


class TestCreateAuthor:
    def test_create_with_courses(self, author_repo, test_db_session):
        data = AuthorForCreationDto(
            first_name="Jaimy",
            last_name="Johnson",
            date_of_birth=date(1981, 2, 14),
            main_category="Navigation",
            courses=[CourseForCreationDto(title="Stars", description="Reading the sky")],
        )
        author = author_repo.create_author(data)

        assert author.name == "Jaimy Johnson"
        assert author.main_category == "Navigation"
        count = test_db_session.execute(
            select(func.count()).select_from(Course).where(Course.author_id == author.id)
        ).scalar()
        assert count == 1

    def test_create_with_date_of_death(self, author_repo):
        data = AuthorForCreationWithDateOfDeathDto(
            first_name="Anne",
            last_name="Bonny",
            date_of_birth=date(1697, 3, 8),
            date_of_death=date(1782, 4, 22),
            main_category="Ships",
        )
        author = author_repo.create_author(data)
        assert author.age == 85

    def test_create_several(self, author_repo):
        authors = author_repo.create_authors(
            [
                AuthorForCreationDto(
                    first_name=name,
                    last_name="Rackham",
                    date_of_birth=date(1682, 12, 26),
                    main_category="Ships",
                )
                for name in ("John", "Calico")
            ]
        )
        assert [a.name for a in authors] == ["John Rackham", "Calico Rackham"]
        assert author_repo.get_by_id(authors[1].id).name == "Calico Rackham"


# =============================================================================
# COURSES
# =============================================================================


class TestCourseRepository:
    """Courses are always addressed through their author."""

    def test_courses_for_author_sorted_by_title(self, course_repo, sample_authors):
        courses = course_repo.get_courses_for_author(sample_authors[0].id)
        assert [c.title for c in courses] == ["Commandeering a Ship", "Overthrowing Mutiny"]
        assert all(c.author_id == sample_authors[0].id for c in courses)

    def test_author_without_courses(self, course_repo, sample_authors):
        assert course_repo.get_courses_for_author(sample_authors[1].id) == []

    def test_author_exists(self, course_repo, sample_authors):
        assert course_repo.author_exists(sample_authors[1].id)
        assert not course_repo.author_exists(uuid4())

    def test_course_must_belong_to_author(self, course_repo, sample_authors):
        course_id = sample_authors[0].courses[0].id
        assert course_repo.get_course(sample_authors[0].id, course_id) is not None
        assert course_repo.get_course(sample_authors[1].id, course_id) is None

    def test_create(self, course_repo, sample_authors):
        author_id = sample_authors[4].id
        course = course_repo.create_course_for_author(
            author_id, CourseForCreationDto(title="Treasure Maps", description="X marks it")
        )
        assert course.author_id == author_id
        assert course_repo.get_course(author_id, course.id).title == "Treasure Maps"

    def test_update(self, course_repo, sample_authors):
        author_id = sample_authors[0].id
        course_id = sample_authors[0].courses[0].id
        updated = course_repo.update_course(
            author_id,
            course_id,
            CourseForUpdateDto(title="Boarding a Ship", description="Politely."),
        )
        assert updated.id == course_id
        assert updated.title == "Boarding a Ship"
        assert updated.description == "Politely."

    def test_update_missing(self, course_repo, sample_authors):
        result = course_repo.update_course(
            sample_authors[0].id, uuid4(), CourseForUpdateDto(title="A", description="B")
        )
        assert result is None

    def test_delete(self, course_repo, sample_authors):
        author_id = sample_authors[0].id
        course_id = sample_authors[0].courses[0].id
        assert course_repo.delete_course(sample_authors[1].id, course_id) is False
        assert course_repo.delete_course(author_id, course_id) is True
        assert course_repo.get_course(author_id, course_id) is None
