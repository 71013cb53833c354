"""
API routers.
"""

from . import invoices, projects, tasks, time_entries

__all__ = ["invoices", "projects", "tasks", "time_entries"]
