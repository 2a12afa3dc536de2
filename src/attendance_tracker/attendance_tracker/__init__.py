"""Student Attendance Tracker package.

Organized by feature modules (catalog, attendance, totals, profiles, realtime)
with a thin Flask controller layer over service and repository layers.
"""
