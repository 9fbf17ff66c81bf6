import json

import pytest
from typer.testing import CliRunner

from roster.cli import app
from roster.config import ENV_NAMES

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES.values():
        monkeypatch.delenv(name, raising=False)


def _base_args(tmp_path):
    return ["--log-dir", str(tmp_path / "logs"), "--report-dir", str(tmp_path / "reports"), "--run-id", "run-1"]


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_help_shows_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("assignments", "overlaps", "spans", "project-keys", "phone", "directory"):
        assert command in result.output


def test_assignments_requires_input(tmp_path):
    result = runner.invoke(app, [*_base_args(tmp_path), "assignments"])

    assert result.exit_code == 2
    report = json.loads((tmp_path / "reports" / "report_assignments_run-1.json").read_text(encoding="utf-8"))
    assert report["status"] == "FAILED"
    assert report["errors"][0]["code"] == "INPUT_REQUIRED"


def test_assignments_writes_sorted_result_and_report(tmp_path):
    employees = _write(
        tmp_path,
        "employees.json",
        {
            "content": [
                {"name": "Late", "project": "L", "start": "2024-06-01"},
                {"name": "Early", "history": [{"from": "2024-01-01", "to": "2024-01-31", "job": 42}]},
            ]
        },
    )
    out = tmp_path / "out" / "assignments.json"

    result = runner.invoke(app, [*_base_args(tmp_path), "assignments", "--input", employees, "--sort", "--out", str(out)])

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [item["project"] for item in data] == ["42", "L"]
    report = json.loads((tmp_path / "reports" / "report_assignments_run-1.json").read_text(encoding="utf-8"))
    assert report["status"] == "SUCCESS"
    assert report["ops"]["assignments"] == {"in": 2, "out": 2}
    assert (tmp_path / "logs" / "assignments_run-1.log").exists()


def test_invalid_input_file_exits_with_1(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{oops", encoding="utf-8")

    result = runner.invoke(app, [*_base_args(tmp_path), "overlaps", "--input", str(broken)])

    assert result.exit_code == 1
    report = json.loads((tmp_path / "reports" / "report_overlaps_run-1.json").read_text(encoding="utf-8"))
    assert report["errors"][0]["code"] == "INVALID_JSON"


def test_project_keys_for_rows(tmp_path):
    rows = _write(tmp_path, "timecards.json", [{"dist_job_code": "220145"}, {"allocation_code": "J-99"}, {}])
    out = tmp_path / "keys.json"

    result = runner.invoke(app, [*_base_args(tmp_path), "project-keys", "--input", rows, "--out", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8")) == [
        {"tier": "distributed", "projectKey": "220145"},
        {"tier": "allocation_code", "projectKey": "J-99"},
        {"tier": "fallback", "projectKey": "Unknown"},
    ]


def test_project_keys_for_single_row(tmp_path):
    row = _write(tmp_path, "row.json", {"home_allocation": "DeptA/Job1"})
    out = tmp_path / "keys.json"

    result = runner.invoke(app, [*_base_args(tmp_path), "project-keys", "--input", row, "--out", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8")) == [{"tier": "home_allocation", "projectKey": "DeptA/Job1"}]


def test_spans_with_employee_lookup(tmp_path):
    rows = _write(tmp_path, "timecards.json", [{"ee_code": "E1", "work_date": "2024-03-01", "allocation_code": "A"}])
    employees = _write(tmp_path, "employees.json", [{"employeeCode": "E1", "name": "Jane Doe"}])
    out = tmp_path / "spans.json"

    result = runner.invoke(
        app, [*_base_args(tmp_path), "spans", "--input", rows, "--employees", employees, "--out", str(out)]
    )

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["employee"] == "Jane Doe"
    assert data[0]["start"] == "2024-03-01T00:00:00"
    assert data[0]["end"] == "2024-03-02T00:00:00"


def test_directory(tmp_path):
    employees = _write(tmp_path, "employees.json", [{"firstName": "ann", "lastName": "lee", "phoneNumber": "555-123-4567"}])
    out = tmp_path / "directory.json"

    result = runner.invoke(app, [*_base_args(tmp_path), "directory", "--input", employees, "--out", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8")) == [
        {
            "name": "Lee, Ann",
            "cecId": None,
            "phone": {"text": "(555) 123-4567", "href": "tel:+15551234567"},
            "status": "other",
            "leased": False,
            "travel": {"pref": 0, "label": "No preference recorded", "notes": ""},
            "scope": "Group / Project not available",
        }
    ]


def test_directory_with_assignment_overlay_and_status_filter(tmp_path):
    employees = _write(
        tmp_path,
        "employees.json",
        {
            "items": [
                {"name": "Ann Lee", "employeeCode": "C1", "employeeStatus": "Active"},
                {"name": "Bo Ray", "employeeCode": "C2", "employeeStatus": "Active", "endDate": "2024-01-31"},
            ]
        },
    )
    assignments = _write(tmp_path, "assignments.json", [{"employeeCode": "c1", "workGroup": "Crew A", "jobNumber": "J-7"}])
    out = tmp_path / "directory.json"

    result = runner.invoke(
        app,
        [*_base_args(tmp_path), "directory", "--input", employees, "--assignments", assignments, "--status", "active", "--out", str(out)],
    )

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [(entry["cecId"], entry["scope"]) for entry in data] == [("C1", "Crew A - J-7")]
    report = json.loads((tmp_path / "reports" / "report_directory_run-1.json").read_text(encoding="utf-8"))
    assert report["ops"]["directory"] == {"in": 2, "out": 1}


def test_phone_prints_channel(tmp_path):
    result = runner.invoke(app, [*_base_args(tmp_path), "phone", "555-123-4567;abc"])

    assert result.exit_code == 0
    assert '"href": "tel:+15551234567"' in result.output
    assert "(555) 123-4567 • abc" in result.output


def test_api_path_requires_base_url(tmp_path):
    result = runner.invoke(app, [*_base_args(tmp_path), "assignments", "--api-path", "/api/employees"])

    assert result.exit_code == 2


def test_invalid_log_level_is_rejected(tmp_path):
    result = runner.invoke(app, [*_base_args(tmp_path), "--log-level", "LOUD", "phone", "1"])

    assert result.exit_code == 2
