"""FastAPI REST API for workplace safety assessments.

This module provides a REST API for listing the available assessments
and running any of them from a JSON body.

Usage:
    uvicorn worksafe.web:app --reload
"""

from worksafe.web.app import app, create_app

__all__ = ["app", "create_app"]
