from __future__ import annotations

from datetime import datetime

from roster.domain.assignments.extractor import extract_assignments
from roster.domain.assignments.overlaps import find_overlaps
from roster.domain.models import Assignment


def _assignment(employee: str, start: str, end: str, project: str) -> Assignment:
    return Assignment(
        employee=employee,
        employee_id=None,
        start=datetime.fromisoformat(start),
        end=datetime.fromisoformat(end),
        project=project,
    )


def test_overlapping_pair_is_reported_once():
    items = [
        _assignment("Ann", "2024-01-10", "2024-01-20", "B"),
        _assignment("Ann", "2024-01-01", "2024-01-15", "A"),
    ]

    overlaps = find_overlaps(items)

    assert len(overlaps) == 1
    assert overlaps[0].employee == "Ann"
    assert (overlaps[0].a.project, overlaps[0].b.project) == ("A", "B")


def test_touching_assignments_do_not_overlap():
    items = [
        _assignment("Ann", "2024-01-01", "2024-01-10", "A"),
        _assignment("Ann", "2024-01-10", "2024-01-20", "B"),
    ]

    assert find_overlaps(items) == []


def test_overlaps_are_per_employee():
    items = [
        _assignment("Ann", "2024-01-01", "2024-01-10", "A"),
        _assignment("Bob", "2024-01-05", "2024-01-12", "B"),
    ]

    assert find_overlaps(items) == []


def test_extracted_assignments_feed_overlap_finder():
    employees = [
        {
            "name": "Cy",
            "project": "Inline",
            "start": "2024-02-01",
            "end": "2024-02-28",
            "history": [{"from": "2024-02-15", "to": "2024-03-15", "project": "Hist"}],
        }
    ]

    overlaps = find_overlaps(extract_assignments(employees))

    assert [(o.a.project, o.b.project) for o in overlaps] == [("Inline", "Hist")]
    assert overlaps[0].to_dict()["a"]["project"] == "Inline"


def test_invalid_items_are_ignored():
    assert find_overlaps([object(), None]) == []
    assert find_overlaps(None) == []
