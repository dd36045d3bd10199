"""
Application package initializer.

The project is organised into small pieces: ``core`` (configuration,
logging, database handle, security), ``schemas`` (request and response
models), ``services`` (database operations) and ``api`` (routers).
"""

from .main import app, create_app  # noqa: F401
