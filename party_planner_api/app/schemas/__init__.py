"""
Pydantic schema definitions.

Every entity has ``*Create`` and ``*Update`` models validating the
submitted forms and a ``*Read`` model for stored documents.  Field
errors carry Spanish, user-facing messages.
"""
