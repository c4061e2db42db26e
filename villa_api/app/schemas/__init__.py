"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the store's records so the wire
representation can change without touching the collection.
"""
