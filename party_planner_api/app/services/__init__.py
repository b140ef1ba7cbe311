"""
Service layer.

Each service persists one entity in its own collection.  Services
return read schemas and signal a missing document with ``None`` or
``False``; validation happens before they are called.
"""
