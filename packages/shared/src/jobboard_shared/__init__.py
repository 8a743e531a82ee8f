"""Shared infrastructure for the job board client.

Provides environment-driven configuration, storage key and message constants,
the durable client-side storage wrapper, and the Pydantic models that cross
the boundary between the request pipeline, the session manager, and callers.
"""
