"""Timeclock package.

Organized by feature modules (workers, attendance, reports, scheduling, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
