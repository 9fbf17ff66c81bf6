from __future__ import annotations

import pytest

from roster.infra.sources.json_source import SourceFormatError, as_record, as_record_list, read_json_file


def test_read_json_file(tmp_path):
    path = tmp_path / "employees.json"
    path.write_text('[{"name": "A"}]', encoding="utf-8")

    assert read_json_file(str(path)) == [{"name": "A"}]


def test_read_json_file_missing(tmp_path):
    with pytest.raises(SourceFormatError) as exc:
        read_json_file(str(tmp_path / "missing.json"))

    assert exc.value.code == "SOURCE_NOT_FOUND"


def test_read_json_file_invalid(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SourceFormatError) as exc:
        read_json_file(str(path))

    assert exc.value.code == "INVALID_JSON"
    assert exc.value.to_dict()["category"] == "source"


def test_as_record_list_unwraps_envelopes_and_filters_items():
    assert as_record_list([{"a": 1}, "x", None]) == [{"a": 1}]
    assert as_record_list({"content": [{"a": 1}], "totalPages": 1}) == [{"a": 1}]
    assert as_record_list({"a": 1}) == []
    assert as_record_list("nope") == []


def test_as_record():
    assert as_record({"a": 1}) == {"a": 1}
    assert as_record([1, 2]) == {}


def test_source_error_renders_code_and_message(tmp_path):
    with pytest.raises(SourceFormatError) as exc:
        read_json_file(str(tmp_path / "missing.json"))

    assert str(exc.value).startswith("SOURCE_NOT_FOUND: ")
    assert exc.value.details == {"path": str(tmp_path / "missing.json")}
