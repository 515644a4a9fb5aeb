from dataclasses import dataclass
from enum import Enum

import pytest

from rbac_admin.domain.projection import project, validate_fields
from rbac_admin.errors import UnsupportedFieldError
from rbac_admin.schemas.projection import SortSpec, UserFilters


class Status(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass(frozen=True)
class Row:
    id: int
    username: str
    name: str
    email: str
    role: str
    status: Status = Status.ACTIVE


ROWS = [
    Row(1, "johndoe", "John Doe", "john@example.com", "Admin"),
    Row(2, "janesmith", "Jane Smith", "jane@example.com", "Editor"),
    Row(3, "bobjohnson", "Bob Johnson", "bob@example.com", "Viewer", Status.INACTIVE),
    Row(4, "alice", "Alice Admin", "alice@corp.io", "Admin", Status.INACTIVE),
]

EXACT = frozenset({"role"})


def test_text_filter_is_case_insensitive_substring() -> None:
    result = project(ROWS, {"name": "JOHN"}, exact_fields=EXACT)

    assert [row.id for row in result] == [1, 3]


def test_empty_text_filter_matches_everything() -> None:
    assert project(ROWS, {"username": "", "email": ""}, exact_fields=EXACT) == ROWS


def test_role_filter_is_exact_with_all_sentinel() -> None:
    assert [row.id for row in project(ROWS, {"role": "Admin"}, exact_fields=EXACT)] == [1, 4]
    assert project(ROWS, {"role": "all"}, exact_fields=EXACT) == ROWS
    # exact match, not substring
    assert project(ROWS, {"role": "Adm"}, exact_fields=EXACT) == []


def test_filters_are_and_combined_and_order_independent() -> None:
    forward = {"email": "example", "role": "Admin", "name": "doe"}
    backward = dict(reversed(list(forward.items())))

    first = project(ROWS, forward, exact_fields=EXACT)
    second = project(ROWS, backward, exact_fields=EXACT)

    assert [row.id for row in first] == [1]
    assert first == second


def test_user_filters_default_keeps_everything() -> None:
    assert project(ROWS, UserFilters().to_filter_map(), exact_fields=EXACT) == ROWS


def test_sort_ascending_and_descending() -> None:
    ascending = project(ROWS, sort=SortSpec(field="username"))
    descending = project(ROWS, sort=SortSpec(field="username", direction="desc"))

    assert [row.username for row in ascending] == ["alice", "bobjohnson", "janesmith", "johndoe"]
    assert [row.username for row in descending] == ["johndoe", "janesmith", "bobjohnson", "alice"]


def test_sort_is_stable_for_equal_keys_in_both_directions() -> None:
    ascending = project(ROWS, sort=SortSpec(field="role"))
    descending = project(ROWS, sort=SortSpec(field="role", direction="desc"))

    assert [row.id for row in ascending] == [1, 4, 2, 3]
    assert [row.id for row in descending] == [3, 2, 1, 4]


def test_sort_enum_field_by_value() -> None:
    result = project(ROWS, sort=SortSpec(field="status"))

    assert [row.id for row in result] == [1, 2, 3, 4]


def test_filter_then_sort() -> None:
    result = project(
        ROWS,
        {"role": "Admin"},
        SortSpec(field="name", direction="desc"),
        exact_fields=EXACT,
    )

    assert [row.name for row in result] == ["John Doe", "Alice Admin"]


def test_project_does_not_mutate_source() -> None:
    source = list(ROWS)

    result = project(source, {"name": "a"}, SortSpec(field="email", direction="desc"))

    assert source == ROWS
    assert result is not source


def test_no_sort_keeps_collection_order() -> None:
    assert project(reversed(ROWS)) == list(reversed(ROWS))


def test_validate_fields_rejects_unknown_filter() -> None:
    with pytest.raises(UnsupportedFieldError, match="Unsupported filter fields: password") as exc_info:
        validate_fields(
            {"password": "x"},
            None,
            filterable=frozenset({"name"}),
            sortable=frozenset({"name"}),
        )

    assert exc_info.value.fields == ["password"]
    assert exc_info.value.code == "UNSUPPORTED_FIELD"


def test_validate_fields_rejects_unknown_sort() -> None:
    with pytest.raises(ValueError, match="Unsupported sort field 'password'"):
        validate_fields(
            None,
            SortSpec(field="password"),
            filterable=frozenset({"name"}),
            sortable=frozenset({"name"}),
        )


class TestSortSpecToggle:
    def test_same_field_flips_direction(self) -> None:
        current = SortSpec(field="name")

        assert current.toggled("name") == SortSpec(field="name", direction="desc")
        assert current.toggled("name").toggled("name") == current

    def test_other_field_resets_to_ascending(self) -> None:
        current = SortSpec(field="name", direction="desc")

        assert current.toggled("email") == SortSpec(field="email", direction="asc")
