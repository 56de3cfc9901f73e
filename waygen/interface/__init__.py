"""Mini README: Service interfaces for Waygen.

Exports the FastAPI application factory for the JSON planning service. The
command-line entry point lives in ``waygen_console.py`` at the project root.
"""

from .web_app import create_application

__all__ = ["create_application"]
