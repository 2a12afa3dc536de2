"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

GROUP_SESSION_KEY = "student_group"

ATTENDANCE_TABLE = "attendance"
TOTALS_TABLE = "student_subject_totals"
