"""Error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from worksafe.domain.services import InputValidationError, UnknownAssessmentError


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(InputValidationError)
    async def input_validation_error_handler(
        request: Request, exc: InputValidationError
    ) -> JSONResponse:
        details = {"field": exc.field, "constraint": exc.constraint}
        if exc.allowed is not None:
            details["allowed"] = exc.allowed
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": "validation",
                "details": details,
            },
        )

    @app.exception_handler(UnknownAssessmentError)
    async def unknown_assessment_handler(
        request: Request, exc: UnknownAssessmentError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"assessment": exc.kind},
            },
        )
