from __future__ import annotations

from datetime import datetime

from roster.domain.assignments.extractor import (
    extract_assignments,
    resolve_employee_id,
    resolve_employee_name,
    sort_by_start,
)


def test_inline_assignment_is_emitted():
    result = extract_assignments(
        [{"employeename": "Jane Doe", "employeeid": 7, "project": "X", "start": "2024-01-01", "end": "2024-01-31"}]
    )

    assert len(result) == 1
    item = result[0]
    assert item.employee == "Jane Doe"
    assert item.employee_id == "7"
    assert item.project == "X"
    assert item.start == datetime(2024, 1, 1)
    assert item.end == datetime(2024, 1, 31)


def test_inline_end_defaults_to_start():
    result = extract_assignments([{"name": "A", "project": "P1", "start_date": "2024-03-05"}])

    assert len(result) == 1
    assert result[0].start == result[0].end == datetime(2024, 3, 5)


def test_inline_unparsable_end_falls_back_to_start():
    result = extract_assignments([{"name": "A", "project": "P1", "startDate": "2024-03-05", "end": "not a date"}])

    assert result[0].end == datetime(2024, 3, 5)


def test_inline_requires_project_and_start():
    assert extract_assignments([{"name": "A", "start": "2024-01-01"}]) == []
    assert extract_assignments([{"name": "A", "project": "P", "end": "2024-01-01"}]) == []
    assert extract_assignments([{"name": "A", "project": "P", "start": "garbage"}]) == []


def test_history_preserves_order_and_drops_entries_without_project():
    employee = {
        "name": "Bob",
        "transfers": [
            {"from": "2024-02-01", "to": "2024-02-10", "project_key": "B"},
            {"start": "2024-01-01", "end": "2024-01-15"},
            {"start_date": "2024-01-01", "end_date": "2024-01-31", "job": "A"},
        ],
    }

    result = extract_assignments([employee])

    assert [item.project for item in result] == ["B", "A"]


def test_history_keeps_falsy_but_defined_project():
    result = extract_assignments([{"name": "Z", "history": [{"start": "2024-01-01", "end": "2024-01-02", "code": 0}]}])

    assert len(result) == 1
    assert result[0].project == "0"


def test_history_entry_with_invalid_date_is_dropped():
    employee = {
        "name": "C",
        "assignments": [
            {"start": "2024-01-01", "end": "nope", "project": "P"},
            {"start": "2024-05-01", "end": "2024-05-02", "project": "Q"},
        ],
    }

    result = extract_assignments([employee])

    assert [item.project for item in result] == ["Q"]


def test_out_of_range_dates_are_treated_as_absent():
    records = [
        {"name": "A", "project": "P", "start": "0001-01-01T00:00:00+05:00"},
        {"name": "B", "history": [{"start": "2024-01-01", "end": "9999-12-31T23:00:00-05:00", "project": "Q"}]},
        {"name": "C", "project": "R", "start": "2024-02-01", "end": "2024-02-10"},
    ]

    result = extract_assignments(records)

    assert [(item.employee, item.project) for item in result] == [("C", "R")]


def test_record_contributes_inline_and_history_without_dedup():
    employee = {
        "name": "D",
        "project": "P",
        "start": "2024-01-01",
        "end": "2024-01-02",
        "transfer_history": [{"start": "2024-01-01", "end": "2024-01-02", "project": "P"}],
    }

    result = extract_assignments([employee])

    assert len(result) == 2
    assert result[0] == result[1]


def test_output_follows_record_order_without_sorting():
    employees = [
        {"name": "Late", "project": "L", "start": "2024-06-01"},
        {"name": "Early", "project": "E", "start": "2024-01-01"},
    ]

    result = extract_assignments(employees)

    assert [item.employee for item in result] == ["Late", "Early"]
    assert [item.employee for item in sort_by_start(result)] == ["Early", "Late"]


def test_non_list_input_and_non_mapping_entries_are_ignored():
    assert extract_assignments(None) == []
    assert extract_assignments({"project": "X"}) == []
    assert extract_assignments("abc") == []
    assert extract_assignments([None, 5, "x"]) == []


def test_name_resolution_fallbacks():
    assert resolve_employee_name({"employee_name": "", "name": "Named"}) == "Named"
    assert resolve_employee_name({"firstName": "Ann", "lastName": "Lee"}) == "Ann Lee"
    assert resolve_employee_name({"last_name": "Lee"}) == "Lee"
    assert resolve_employee_name({}) == "—"


def test_id_resolution_takes_first_non_null():
    assert resolve_employee_id({"employeeid": None, "empId": "E-1", "id": 3}) == "E-1"
    assert resolve_employee_id({"id": 0}) == "0"
    assert resolve_employee_id({}) is None


def test_to_dict_uses_rendering_keys():
    item = extract_assignments([{"name": "A", "empId": "9", "project": "P", "start": "2024-01-01"}])[0]

    assert item.to_dict() == {
        "employee": "A",
        "employeeId": "9",
        "start": "2024-01-01T00:00:00",
        "end": "2024-01-01T00:00:00",
        "project": "P",
    }
