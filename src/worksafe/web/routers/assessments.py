"""Assessment endpoints."""

from fastapi import APIRouter

from worksafe.domain.services.assessment import TABLE_VERSION
from worksafe.web.dependencies import AssessmentServiceDep
from worksafe.web.schemas import (
    AssessmentCatalogSchema,
    AssessmentRequest,
    AssessmentResponseSchema,
)

router = APIRouter(prefix="/assessments", tags=["assessments"])


@router.get("", response_model=AssessmentCatalogSchema)
async def list_assessments(service: AssessmentServiceDep) -> AssessmentCatalogSchema:
    """List available assessments and their declared inputs."""
    return AssessmentCatalogSchema(
        table_version=TABLE_VERSION,
        assessments=service.available_assessments(),
    )


@router.post("/{kind}", response_model=AssessmentResponseSchema)
async def run_assessment(
    kind: str,
    request: AssessmentRequest,
    service: AssessmentServiceDep,
) -> AssessmentResponseSchema:
    """Run one assessment.

    Unknown kinds return 404 and invalid inputs return 422, both through
    the registered exception handlers.
    """
    result = service.calculate(kind, request.inputs)
    return AssessmentResponseSchema(
        assessment=result.kind.value,
        table_version=TABLE_VERSION,
        result=result.to_dict(),
    )
