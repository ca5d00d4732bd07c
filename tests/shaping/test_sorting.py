"""Tests for translating order-by expressions into SQL ORDER BY terms."""

import pytest
from sqlalchemy import select

from course_library_mcp.database.schema import Author, Course
from course_library_mcp.models.author import AuthorDto
from course_library_mcp.shaping import (
    InvalidOrderByError,
    PropertyMapping,
    PropertyMappingError,
    PropertyMappingValue,
    apply_sort,
)


def order_by_sql(query) -> str:
    sql = str(query.compile())
    return sql.split("ORDER BY", 1)[1].strip() if "ORDER BY" in sql else ""


@pytest.fixture
def author_mapping(property_mappings):
    return property_mappings.get_mapping(AuthorDto, Author)


class TestApplySortSql:
    """Test the generated ORDER BY terms."""

    def test_name_expands_to_first_and_last_name(self, author_mapping):
        query = apply_sort(select(Author), "name", author_mapping)
        assert order_by_sql(query) == "authors.first_name ASC, authors.last_name ASC"

    def test_descending_applies_to_every_destination(self, author_mapping):
        query = apply_sort(select(Author), "name desc", author_mapping)
        assert order_by_sql(query) == "authors.first_name DESC, authors.last_name DESC"

    def test_revert_flips_direction(self, author_mapping):
        assert order_by_sql(apply_sort(select(Author), "age", author_mapping)) == (
            "authors.date_of_birth DESC"
        )
        assert order_by_sql(apply_sort(select(Author), "age desc", author_mapping)) == (
            "authors.date_of_birth ASC"
        )

    def test_clauses_keep_request_order(self, author_mapping):
        query = apply_sort(select(Author), "mainCategory, age desc", author_mapping)
        assert order_by_sql(query) == "authors.main_category ASC, authors.date_of_birth ASC"

    def test_empty_expression_leaves_query_unsorted(self, author_mapping):
        query = select(Author)
        assert apply_sort(query, "", author_mapping) is query
        assert apply_sort(query, None, author_mapping) is query

    def test_unknown_fields_are_reported(self, author_mapping):
        with pytest.raises(InvalidOrderByError) as exc_info:
            apply_sort(select(Author), "name, firstName, bogus desc", author_mapping)
        assert exc_info.value.field_names == ["firstName", "bogus"]

    def test_malformed_clause(self, author_mapping):
        with pytest.raises(InvalidOrderByError):
            apply_sort(select(Author), "name upward", author_mapping)

    def test_destination_must_be_a_column(self):
        mapping = PropertyMapping(
            AuthorDto, Course, {"name": PropertyMappingValue(destination_properties=("nickname",))}
        )
        with pytest.raises(PropertyMappingError):
            apply_sort(select(Course), "name", mapping)


class TestApplySortResults:
    """Test sorting against real rows."""

    def rows(self, session, order_by, mapping):
        query = apply_sort(select(Author), order_by, mapping)
        return [author.first_name for author in session.execute(query).scalars()]

    def test_sort_by_name(self, test_db_session, sample_authors, author_mapping):
        assert self.rows(test_db_session, "name", author_mapping) == [
            "Arnold",
            "Berry",
            "Eli",
            "Nancy",
            "Seabury",
        ]

    def test_sort_by_age_descending_puts_earliest_birth_first(
        self, test_db_session, sample_authors, author_mapping
    ):
        assert self.rows(test_db_session, "age desc", author_mapping) == [
            "Berry",
            "Nancy",
            "Eli",
            "Arnold",
            "Seabury",
        ]

    def test_sort_by_category_then_name(self, test_db_session, sample_authors, author_mapping):
        assert self.rows(test_db_session, "mainCategory desc, name", author_mapping) == [
            "Arnold",
            "Eli",
            "Berry",
            "Nancy",
            "Seabury",
        ]
