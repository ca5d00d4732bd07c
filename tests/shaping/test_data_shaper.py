"""Tests for the data shaper."""

from dataclasses import dataclass
from uuid import uuid4

import pytest

from course_library_mcp.models.author import AuthorDto, AuthorFullDto
from course_library_mcp.shaping import FieldNotFoundError, shape_data, shape_many, shape_one


@dataclass
class Point:
    x: int
    y: int


def make_author(name: str = "Berry Griffin Beak Eldritch", age: int = 49) -> AuthorDto:
    return AuthorDto(id=uuid4(), name=name, age=age, main_category="Ships")


class TestShapeOne:
    """Test shaping a single resource."""

    def test_no_fields_returns_all_fields_in_declaration_order(self):
        author = make_author()
        shaped = shape_data(author)
        assert list(shaped) == ["id", "name", "age", "mainCategory"]
        assert shaped == {
            "id": author.id,
            "name": author.name,
            "age": author.age,
            "mainCategory": "Ships",
        }

    @pytest.mark.parametrize("fields", ["", "   "])
    def test_blank_fields_behave_like_none(self, fields):
        assert list(shape_data(make_author(), fields)) == ["id", "name", "age", "mainCategory"]

    def test_selected_fields_follow_request_order(self):
        author = make_author()
        shaped = shape_data(author, "mainCategory,id")
        assert list(shaped) == ["mainCategory", "id"]
        assert shaped["id"] == author.id

    def test_field_names_are_case_and_whitespace_insensitive(self):
        author = make_author()
        shaped = shape_data(author, " NAME ,  age")
        assert shaped == {"name": author.name, "age": author.age}

    def test_attribute_names_map_to_public_keys(self):
        shaped = shape_data(make_author(), "main_category")
        assert shaped == {"mainCategory": "Ships"}

    def test_unknown_field_names_field_and_type(self):
        with pytest.raises(FieldNotFoundError) as exc_info:
            shape_data(make_author(), "id,nonexistentField")
        assert exc_info.value.field_name == "nonexistentField"
        assert exc_info.value.resource_type is AuthorDto

    def test_output_is_a_fresh_dict(self):
        author = make_author()
        shaped = shape_data(author, "id")
        shaped["links"] = []
        assert list(shaped) == ["id", "links"]
        assert list(shape_data(author, "id")) == ["id"]

    def test_full_representation(self):
        author = AuthorFullDto(
            id=uuid4(),
            first_name="Nancy",
            last_name="Swashbuckler Rye",
            date_of_birth="1668-05-21",
            main_category="Rum",
        )
        shaped = shape_one(author, "firstName,dateOfBirth")
        assert shaped == {"firstName": "Nancy", "dateOfBirth": author.date_of_birth}

    def test_dataclass_resource(self):
        assert shape_data(Point(1, 2), "y") == {"y": 2}

    def test_none_source_rejected(self):
        with pytest.raises(ValueError):
            shape_one(None)
        with pytest.raises(ValueError):
            shape_data(None)


class TestShapeMany:
    """Test shaping sequences of resources."""

    def test_each_item_has_same_keys_in_same_order(self):
        authors = [make_author(name=f"Author {i}", age=30 + i) for i in range(5)]
        shaped = shape_data(authors, "age,name")

        assert len(shaped) == 5
        for author, item in zip(authors, shaped, strict=True):
            assert list(item) == ["age", "name"]
            assert item == {"age": author.age, "name": author.name}

    def test_sequence_order_is_preserved(self):
        authors = [make_author(name=name) for name in ["Zed", "Amy", "Kim"]]
        assert [item["name"] for item in shape_data(authors, "name")] == ["Zed", "Amy", "Kim"]

    def test_generators_and_tuples_are_sequences(self):
        authors = (make_author(), make_author())
        assert len(shape_data(authors, "id")) == 2
        assert len(shape_data(author for author in authors)) == 2

    def test_empty_sequence(self):
        assert shape_data([]) == []
        assert shape_many([], "id", resource_type=AuthorDto) == []

    def test_empty_sequence_still_validates_fields_when_type_known(self):
        with pytest.raises(FieldNotFoundError):
            shape_many([], "bogus", resource_type=AuthorDto)

    def test_unknown_field_fails_whole_sequence(self):
        with pytest.raises(FieldNotFoundError):
            shape_data([make_author(), make_author()], "name,bogus")

    def test_mixed_types_rejected(self):
        with pytest.raises(ValueError):
            shape_many([make_author(), Point(1, 2)])

    def test_none_source_rejected(self):
        with pytest.raises(ValueError):
            shape_many(None)
