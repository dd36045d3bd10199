"""
Service layer.

Each service encapsulates the database operations for one concern and
receives the ``Database`` handle explicitly, so API handlers stay thin
and tests can substitute an in-memory client.
"""
