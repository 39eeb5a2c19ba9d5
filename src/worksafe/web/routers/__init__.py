"""API routers for the REST API."""

from worksafe.web.routers.assessments import router as assessments_router

__all__ = ["assessments_router"]
