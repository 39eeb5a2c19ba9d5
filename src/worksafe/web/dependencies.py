"""FastAPI dependency injection for assessment services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from worksafe.domain.services import AssessmentService


@lru_cache(maxsize=1)
def get_assessment_service() -> AssessmentService:
    """Get cached AssessmentService instance."""
    return AssessmentService()


# Type aliases for cleaner endpoint signatures
AssessmentServiceDep = Annotated[AssessmentService, Depends(get_assessment_service)]
