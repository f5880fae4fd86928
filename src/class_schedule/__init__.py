"""Class Schedule package.

Organized by feature modules (subjects, timetables, classes, reminders, ...)
with a thin Flask controller layer over service and persistence layers.
"""
