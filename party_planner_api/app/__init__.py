"""
Application package for the Party Planner site.

Layers, from the bottom up:

* ``core``: configuration, logging, the database handle, the view
  cache, form parsing and the admin access gate;
* ``schemas``: pydantic models validating forms and describing stored
  documents;
* ``services``: persistence of each entity;
* ``actions``: validate, persist and revalidate, returning a uniform
  result;
* ``api``: HTTP routes exposing the public site and the back office.
"""

from .main import app  # noqa: F401
