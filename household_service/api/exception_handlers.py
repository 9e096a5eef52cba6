"""Global exception handlers that map domain exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from household_service.errors import (
    VALIDATION_ERROR,
    DirectoryUnavailableError,
    DomainError,
    DomainValidationError,
    DuplicateResourceError,
    HouseholdHasMembersError,
    NotFoundError,
)
from household_service.schemas.error import (
    ErrorResponse,
    FieldErrorDetail,
    ValidationErrorResponse,
)


def _error_response(status_code: int, exc: DomainError) -> JSONResponse:
    """Return a standardized error response for a domain exception."""
    body = ErrorResponse(title=exc.title, detail=exc.message, code=exc.code, path=exc.path)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def domain_validation_error_handler(
    _request: Request, exc: DomainValidationError
) -> JSONResponse:
    body = ValidationErrorResponse(
        title=exc.title,
        detail=exc.message,
        code=exc.code,
        path=exc.path,
        errors=[FieldErrorDetail(field=e.field, message=e.message) for e in exc.errors],
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report unparseable request bodies and parameters in the same envelope."""
    errors = []
    for error in exc.errors():
        # loc is e.g. ("body", "zip_code") or ("path", "household_id")
        loc = [
            str(part)
            for part in error.get("loc", ())
            if part not in ("body", "path", "query")
        ]
        errors.append(
            FieldErrorDetail(field=".".join(loc) or "body", message=error.get("msg", ""))
        )
    body = ValidationErrorResponse(
        title=DomainValidationError.title,
        detail="Could not parse request.",
        code=VALIDATION_ERROR,
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body.model_dump()
    )


def duplicate_resource_error_handler(
    _request: Request, exc: DuplicateResourceError
) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, exc)


def household_has_members_error_handler(
    _request: Request, exc: HouseholdHasMembersError
) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, exc)


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


def directory_unavailable_error_handler(
    _request: Request, exc: DirectoryUnavailableError
) -> JSONResponse:
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(DuplicateResourceError, duplicate_resource_error_handler)
    app.add_exception_handler(HouseholdHasMembersError, household_has_members_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(DirectoryUnavailableError, directory_unavailable_error_handler)
