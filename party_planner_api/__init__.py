"""
Top-level package for the Party Planner site API.

All functionality lives in submodules under ``app``; the application
itself is ``party_planner_api.app.main:app``.
"""

__all__ = []
