"""
Version 1 of the site API.

Public routes live under ``/api/v1``; the back office under ``/admin``.
"""
