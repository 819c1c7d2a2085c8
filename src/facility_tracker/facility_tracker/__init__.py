"""Facility Tracker package.

Organized by feature modules (topology, tasks, progress, attendance, ...)
with a thin Flask controller layer over service/repository layers.
"""
