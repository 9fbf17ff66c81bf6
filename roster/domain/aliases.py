from __future__ import annotations

# Employee records

EMPLOYEE_NAME_KEYS: tuple[str, ...] = ("employeename", "employee_name", "name")
FIRST_NAME_KEYS: tuple[str, ...] = ("firstName", "first_name")
LAST_NAME_KEYS: tuple[str, ...] = ("lastName", "last_name")
EMPLOYEE_ID_KEYS: tuple[str, ...] = ("employeeid", "employeeId", "empId", "id")

INLINE_PROJECT_KEY = "project"
INLINE_START_KEYS: tuple[str, ...] = ("start", "start_date", "startDate")
INLINE_END_KEYS: tuple[str, ...] = ("end", "end_date", "endDate")

HISTORY_KEYS: tuple[str, ...] = ("transfers", "transfer_history", "history", "assignments")
HISTORY_START_KEYS: tuple[str, ...] = ("start", "start_date", "from")
HISTORY_END_KEYS: tuple[str, ...] = ("end", "end_date", "to")
HISTORY_PROJECT_KEYS: tuple[str, ...] = ("project", "project_key", "projectId", "job", "code")

CEC_ID_KEYS: tuple[str, ...] = ("employeeCode", "empCode", "emp_code", "cec_id")
DISPLAY_FIRST_NAME_KEYS: tuple[str, ...] = ("firstName", "firstname", "first_name", "first")
DISPLAY_LAST_NAME_KEYS: tuple[str, ...] = ("lastName", "lastname", "last_name", "last")
DISPLAY_FULL_NAME_KEYS: tuple[str, ...] = ("employeename", "employeeName", "name", "fullName", "fullname")
PHONE_KEYS: tuple[str, ...] = ("phoneNumber", "phone_number", "primary_phone", "work_phone")

STATUS_NORM_KEYS: tuple[str, ...] = ("status_norm", "statusNorm")
STATUS_KEYS: tuple[str, ...] = ("employeeStatus", "employee_status")
END_DATE_KEYS: tuple[str, ...] = ("endDate", "end_date")

LEASED_FLAG_KEYS: tuple[str, ...] = ("isLeased", "leased", "leased_flag", "leasedLabor")
LEASED_HINT_KEYS: tuple[str, ...] = (
    "employmentType",
    "employeeType",
    "workerType",
    "vendor",
    "agency",
    "supplier",
    "staffingFirm",
    "notes",
    "moreNotes",
    "employeeVerify",
    "workGroup",
    "project",
)
LEASED_VENDOR_KEYS: tuple[str, ...] = ("vendor", "agency", "supplier")

TRAVEL_PREF_KEYS: tuple[str, ...] = ("travelPref", "travel_pref", "travel_preference", "travelPreference", "travel")
TRAVEL_NOTES_KEYS: tuple[str, ...] = ("travelNotes", "travel_notes", "travel_note", "travelcomments")

WORK_GROUP_KEY = "workGroup"
SCOPE_ASSIGNMENT_PROJECT_KEYS: tuple[str, ...] = ("jobNumber", "project")
SCOPE_EMPLOYEE_PROJECT_KEYS: tuple[str, ...] = ("project", "jobNumber")
ASSIGNMENT_ENVELOPE_KEY = "assignment"

# Timecard rows

DIST_JOB_KEYS: tuple[str, ...] = ("dist_job_code", "distJobCode", "job_no", "job_no_ag")
DIST_JOB_DESC_KEYS: tuple[str, ...] = ("dist_job_desc", "distJobDesc", "job_desc", "job_desc_ah")
DIST_ACTIVITY_KEYS: tuple[str, ...] = (
    "dist_activity_code",
    "distActivityCode",
    "activity_code",
    "activity_code_ak",
)
DIST_ACTIVITY_DESC_KEYS: tuple[str, ...] = (
    "dist_activity_desc",
    "distActivityDesc",
    "activity_desc",
    "activity_desc_al",
)

HOME_ALLOCATION_KEYS: tuple[str, ...] = ("home_allocation", "homeAllocation")
# Order matters: parts are joined in this order.
HOME_ALLOCATION_PART_KEYS: tuple[tuple[str, str], ...] = (
    ("home_department", "homeDepartment"),
    ("home_job_code", "homeJobCode"),
    ("home_section_code", "homeSectionCode"),
    ("home_activity_code", "homeActivityCode"),
    ("home_user_access_code", "homeUserAccessCode"),
    ("home_sub_department_code", "homeSubDepartmentCode"),
)
ALLOCATION_CODE_KEYS: tuple[str, ...] = ("allocation_code", "allocation", "charged_allocation")

# Timecard spans (case/separator-insensitive lookup)

TIMECARD_EMPLOYEE_CODE_KEYS: tuple[str, ...] = (
    "eeCode",
    "ee_code",
    "employeeCode",
    "employee_code",
    "emp_code",
    "code",
    "cec_id",
    "cecId",
)
SPAN_MARKER_KEYS: tuple[str, ...] = (
    "start",
    "end",
    "start_date",
    "startDate",
    "end_date_excl",
    "endDateExcl",
    "endExclusive",
)
SPAN_START_KEYS: tuple[str, ...] = ("startDate", "start_date", "start")
SPAN_END_KEYS: tuple[str, ...] = ("endDateExcl", "end_date_excl", "endExclusive", "end")
DAILY_DAY_KEYS: tuple[tuple[str, ...], ...] = (
    ("work_date",),
    ("in_punch_time", "inPunchTime"),
    ("out_punch_time", "outPunchTime"),
    ("start",),
    ("end",),
)
EXPLICIT_PROJECT_KEYS: tuple[str, ...] = ("projectKey", "project")
TOTAL_HOURS_KEYS: tuple[str, ...] = ("totalHours", "total_hours", "earn_hours")

SPAN_EMPLOYEE_ID_KEYS: tuple[str, ...] = ("employeeid", "employeeId", "empId", "id")
SPAN_EMPLOYEE_SINGLE_NAME_KEYS: tuple[str, ...] = ("employee_name", "employeename", "name", "displayName")
SPAN_ROW_SINGLE_NAME_KEYS: tuple[str, ...] = (
    "employee_name",
    "employeename",
    "employeeName",
    "name",
    "displayName",
)
SPAN_LAST_NAME_KEYS: tuple[str, ...] = ("lastName", "lastname", "last_name", "surname", "last")
SPAN_FIRST_NAME_KEYS: tuple[str, ...] = ("firstName", "firstname", "first_name", "givenName", "first")

SPAN_DIST_JOB_KEYS: tuple[str, ...] = ("distJobCode", "dist_job_code")
SPAN_ALLOCATION_KEYS: tuple[str, ...] = ("allocationCode", "allocation_code")
SPAN_HOME_ALLOCATION_KEYS: tuple[str, ...] = ("homeAllocation", "home_allocation")
# Span project fallback order after the explicit project column.
SPAN_PROJECT_FALLBACK_KEYS: tuple[tuple[str, ...], ...] = (
    SPAN_DIST_JOB_KEYS,
    SPAN_ALLOCATION_KEYS,
    SPAN_HOME_ALLOCATION_KEYS,
)

# (meta field, lookup candidates)
SPAN_META_KEYS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("dist_job_code", SPAN_DIST_JOB_KEYS),
    ("dist_job_desc", ("distJobDesc", "dist_job_desc")),
    ("dist_activity_code", ("distActivityCode", "dist_activity_code")),
    ("dist_activity_desc", ("distActivityDesc", "dist_activity_desc")),
    ("allocation_code", SPAN_ALLOCATION_KEYS),
    ("home_allocation", SPAN_HOME_ALLOCATION_KEYS),
)
