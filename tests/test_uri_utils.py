"""Tests for library:// URI parsing and building."""

from uuid import UUID, uuid4

import pytest

from course_library_mcp.resources.uri_utils import (
    URIParseError,
    build_library_uri,
    format_author_ids,
    parse_author_ids,
    parse_library_uri,
    parse_uuid,
)

AUTHOR_ID = UUID("d28888e9-2ba9-473a-a40f-e38cb54f9b35")
OTHER_ID = UUID("da2fd609-d754-4feb-8acd-c4f9ff13ba96")


class TestParseLibraryUri:
    """Test splitting URIs into path components."""

    def test_collection(self):
        assert parse_library_uri("library://authors") == ["authors"]

    def test_nested_path(self):
        assert parse_library_uri(f"library://authors/{AUTHOR_ID}/courses") == [
            "authors",
            str(AUTHOR_ID),
            "courses",
        ]

    def test_triple_slash(self):
        assert parse_library_uri("library:///authors/abc") == ["authors", "abc"]

    def test_query_is_ignored(self):
        assert parse_library_uri("library://authors?pageNumber=2&orderBy=name") == ["authors"]

    @pytest.mark.parametrize("uri", ["http://authors", "authors/1", "library://"])
    def test_invalid(self, uri):
        with pytest.raises(URIParseError):
            parse_library_uri(uri)


class TestBuildLibraryUri:
    """Test building URIs with optional query parameters."""

    def test_path_segments(self):
        assert build_library_uri("authors", AUTHOR_ID, "courses") == (
            f"library://authors/{AUTHOR_ID}/courses"
        )

    def test_none_values_are_omitted(self):
        uri = build_library_uri("authors", query={"pageNumber": 2, "fields": None})
        assert uri == "library://authors?pageNumber=2"

    def test_all_none_query(self):
        assert build_library_uri("authors", query={"fields": None}) == "library://authors"

    def test_values_are_encoded(self):
        uri = build_library_uri("authors", query={"orderBy": "age desc", "fields": "id,name"})
        assert uri == "library://authors?orderBy=age+desc&fields=id%2Cname"

    def test_round_trip_path(self):
        uri = build_library_uri("authors", AUTHOR_ID, query={"fields": "name"})
        assert parse_library_uri(uri) == ["authors", str(AUTHOR_ID)]


class TestParseUuid:
    def test_valid(self):
        assert parse_uuid(f" {AUTHOR_ID} ") == AUTHOR_ID

    def test_invalid_names_parameter(self):
        with pytest.raises(URIParseError, match="Invalid author_id"):
            parse_uuid("not-a-uuid", "author_id")


class TestAuthorIds:
    """Test the (id1,id2) author collection key."""

    def test_parenthesized(self):
        assert parse_author_ids(f"({AUTHOR_ID},{OTHER_ID})") == [AUTHOR_ID, OTHER_ID]

    def test_without_parentheses_and_with_spaces(self):
        assert parse_author_ids(f"{AUTHOR_ID}, {OTHER_ID}") == [AUTHOR_ID, OTHER_ID]

    def test_percent_encoded(self):
        assert parse_author_ids(f"%28{AUTHOR_ID}%2C{OTHER_ID}%29") == [AUTHOR_ID, OTHER_ID]

    def test_empty_entries_ignored(self):
        assert parse_author_ids(f"({AUTHOR_ID},)") == [AUTHOR_ID]

    @pytest.mark.parametrize("value", ["()", "", " , "])
    def test_no_ids(self, value):
        with pytest.raises(URIParseError, match="No author ids"):
            parse_author_ids(value)

    def test_invalid_id(self):
        with pytest.raises(URIParseError):
            parse_author_ids(f"({AUTHOR_ID},42)")

    def test_format(self):
        ids = [uuid4(), uuid4()]
        assert format_author_ids(ids) == f"({ids[0]},{ids[1]})"
        assert parse_author_ids(format_author_ids(ids)) == ids
