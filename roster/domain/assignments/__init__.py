from .extractor import extract_assignments, resolve_employee_id, resolve_employee_name, sort_by_start
from .overlaps import find_overlaps
from .timecard_spans import build_spans_from_timecards, index_employees_by_code, merge_adjacent_spans

__all__ = [
    "extract_assignments",
    "resolve_employee_id",
    "resolve_employee_name",
    "sort_by_start",
    "find_overlaps",
    "build_spans_from_timecards",
    "index_employees_by_code",
    "merge_adjacent_spans",
]
