"""Mini README: Service interfaces for SkyAvoid.

Exports the FastAPI application factory backing the planning service. The
command line entry point lives in ``main_planner.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
