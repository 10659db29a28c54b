"""Identifier arithmetic: components, increments, parents and children."""

import pytest

from luhmann.vault.ids import (
    first_available_id,
    first_child_of,
    increment_component,
    increment_id,
    next_component_kind,
    parent_id,
    parse_components,
    sort_key,
)


def test_parse_components_alternating_runs():
    assert parse_components("1a2") == ["1", "a", "2"]
    assert parse_components("12ab345") == ["12", "ab", "345"]


def test_parse_components_drops_other_characters():
    assert parse_components("1a-2") == ["1", "a", "2"]
    assert parse_components("1.2") == ["1", "2"]
    assert parse_components("1A2") == ["1", "2"]


def test_parse_components_nothing_to_parse():
    assert parse_components("") == []
    assert parse_components("-_ ") == []


@pytest.mark.parametrize(
    "component,expected",
    [("0", "1"), ("9", "10"), ("42", "43"), ("09", "10")],
)
def test_increment_numeric_component(component: str, expected: str):
    assert increment_component(component) == expected


@pytest.mark.parametrize(
    "component,expected",
    [("a", "b"), ("y", "z"), ("z", "aa"), ("az", "aaa"), ("ab", "ac"), ("zz", "zaa")],
)
def test_increment_letter_component_only_touches_last_letter(component: str, expected: str):
    assert increment_component(component) == expected


def test_increment_component_degrades_on_bad_input():
    assert increment_component("") == ""
    assert increment_component("A") == "A"


def test_increment_id_changes_deepest_component():
    assert increment_id("1") == "2"
    assert increment_id("1a") == "1b"
    assert increment_id("1a9") == "1a10"
    assert increment_id("1z") == "1aa"


def test_increment_id_without_components_is_unchanged():
    assert increment_id("") == ""
    assert increment_id("--") == "--"


def test_parent_id():
    assert parent_id("1a2") == "1a"
    assert parent_id("1a") == "1"
    assert parent_id("1") == ""
    assert parent_id("") == ""


@pytest.mark.parametrize("identifier", ["1", "9", "1a", "1z", "1a2", "3bc7", "1a9"])
def test_increment_never_reparents(identifier: str):
    assert parent_id(increment_id(identifier)) == parent_id(identifier)


@pytest.mark.parametrize("identifier", ["1", "1a", "1a2", "12ab34", "1z"])
def test_first_child_round_trips_to_parent(identifier: str):
    assert parent_id(first_child_of(identifier)) == identifier


def test_next_component_kind_alternates():
    assert next_component_kind("1") == "a"
    assert next_component_kind("1a") == "1"
    assert next_component_kind("1a2") == "a"
    assert next_component_kind("") == "1"


def test_first_child_of():
    assert first_child_of("1") == "1a"
    assert first_child_of("1a") == "1a1"


def test_first_available_id_skips_occupied():
    existing = {"1", "2", "3"}
    assert first_available_id("1", existing.__contains__) == "4"


def test_first_available_id_returns_start_when_free():
    assert first_available_id("5", {"1", "2"}.__contains__) == "5"


def test_first_available_id_walks_letters_through_overflow():
    existing = {"1y", "1z"}
    assert first_available_id("1y", existing.__contains__) == "1aa"


def test_sort_key_follows_increment_order():
    ids = ["1a10", "1b", "1a2", "1aa", "1z", "1a"]
    assert sorted(ids, key=sort_key) == ["1a", "1a2", "1a10", "1b", "1z", "1aa"]
