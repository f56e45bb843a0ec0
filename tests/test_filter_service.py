"""Tests for record search and filters."""

import pandas as pd

from services import filter_service

MEMBERS = pd.DataFrame(
    [
        {"name": "John Dela Cruz", "email": "john.dc@email.com", "ministry": "Choir", "status": "Active"},
        {"name": "Maria Santos", "email": "maria.s@email.com", "ministry": "Youth Ministry", "status": "Active"},
        {"name": "Carlos Mendoza", "email": "carlos.m@email.com", "ministry": "Choir", "status": "Inactive"},
        {"name": "Ana Garcia", "email": "ana.g@email.com", "ministry": "", "status": "Active"},
    ]
)


def test_filter_options_are_sorted_and_skip_blanks():
    options = filter_service.get_filter_options(MEMBERS, ["ministry", "status", "missing"])
    assert options == {
        "ministry": ["Choir", "Youth Ministry"],
        "status": ["Active", "Inactive"],
        "missing": [],
    }


def test_search_is_case_insensitive_across_columns():
    by_name = filter_service.apply_search(MEMBERS, "SANTOS", ["name", "email"])
    by_email = filter_service.apply_search(MEMBERS, "carlos.m@", ["name", "email"])

    assert by_name["name"].tolist() == ["Maria Santos"]
    assert by_email["name"].tolist() == ["Carlos Mendoza"]


def test_blank_search_keeps_everything():
    assert len(filter_service.apply_search(MEMBERS, "   ", ["name"])) == 4


def test_search_treats_term_literally():
    assert filter_service.apply_search(MEMBERS, ".*", ["name"]).empty


def test_filters_combine_with_search():
    filtered = filter_service.apply_filters(MEMBERS, {"ministry": "Choir", "status": "All"})
    assert filtered["name"].tolist() == ["John Dela Cruz", "Carlos Mendoza"]

    searched = filter_service.apply_search(filtered, "john", ["name"])
    assert searched["name"].tolist() == ["John Dela Cruz"]


def test_signature_changes_with_any_input():
    base = filter_service.filters_signature("maria", {"status": "Active"})

    assert base == filter_service.filters_signature(" Maria ", {"status": "Active"})
    assert base != filter_service.filters_signature("maria", {"status": "Inactive"})
    assert base != filter_service.filters_signature("mar", {"status": "Active"})
