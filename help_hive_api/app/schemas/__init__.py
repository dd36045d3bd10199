"""
Pydantic schema definitions for API payloads.

Schemas are separated from the raw MongoDB documents to decouple the
API representation from persistence.
"""
