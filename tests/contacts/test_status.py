from __future__ import annotations

import pytest

from roster.domain.contacts.status import has_real_end_date, is_leased, leased_score, normalize_status


@pytest.mark.parametrize(
    ("employee", "expected"),
    [
        ({"employeeStatus": "Active"}, "active"),
        ({"employee_status": " TERMED "}, "terminated"),
        ({"employeeStatus": "on_leave"}, "inactive"),
        ({"employeeStatus": "seasonal"}, "other"),
        ({}, "other"),
        ({"employeeStatus": "Active", "endDate": "2024-03-01"}, "terminated"),
        ({"employeeStatus": "Active", "end_date": "2024-03-01"}, "terminated"),
        ({"statusNorm": "Inactive", "endDate": "2024-03-01"}, "inactive"),
    ],
)
def test_normalize_status(employee, expected):
    assert normalize_status(employee) == expected


@pytest.mark.parametrize("end", ["0000-00-00", "00/00/0000", "0000-00-00 00:00:00", "null", "Undefined", "  ", None])
def test_placeholder_end_dates_do_not_terminate(end):
    assert has_real_end_date(end) is False
    assert normalize_status({"employeeStatus": "active", "endDate": end}) == "active"


def test_real_end_date_detected():
    assert has_real_end_date("2023-12-31") is True
    assert has_real_end_date("12/31/2023 00:00:00") is True


@pytest.mark.parametrize(
    ("flag", "expected"),
    [(True, True), ("TRUE", True), (1, True), (False, False), ("yes", False), (0, False), ("1", False)],
)
def test_explicit_leased_flag_wins(flag, expected):
    # heuristics would say leased, the explicit flag decides
    employee = {"isLeased": flag, "vendor": "Acme Staffing", "employeeCode": "LL-1"}

    assert is_leased(employee) is expected


def test_leased_heuristics():
    assert is_leased({"employmentType": "Contractor"}) is True
    assert is_leased({"agency": "Northwind"}) is True
    assert is_leased({"notes": "temp"}) is True
    assert is_leased({"employeeCode": "TMP-9"}) is False
    assert is_leased({"employeeCode": "TMP-9", "notes": "1099"}) is True
    assert is_leased({"employmentType": "contractor, now FTE"}) is False
    assert is_leased({"project": "Temple St"}) is False
    assert is_leased(None) is False


def test_leased_score_components():
    employee = {"vendor": "Acme", "employeeType": "lease labor", "employeeCode": "agy-3"}

    assert leased_score(employee) == 5
