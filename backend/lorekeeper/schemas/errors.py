"""Error response schemas for the OpenAPI document."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every handled error."""

    detail: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Stable machine-readable error code")


class NotFoundErrorResponse(ErrorResponse):
    """Resource absent or concealed (404)."""

    model_config = {
        "json_schema_extra": {"example": {"detail": "Tag not found", "code": "NOT_FOUND"}}
    }


class ForbiddenErrorResponse(ErrorResponse):
    """Viewable but not modifiable, or insufficient role (403)."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "detail": "You do not have permission to modify this tag",
                "code": "FORBIDDEN",
            }
        }
    }


class ConflictErrorResponse(ErrorResponse):
    """Name collision or resource still referenced (409)."""

    model_config = {
        "json_schema_extra": {
            "example": {"detail": "Tag with name 'Fire' already exists", "code": "CONFLICT"}
        }
    }


class ValidationErrorResponse(ErrorResponse):
    """Malformed cursor, unknown sort field or invalid write payload (400)."""

    model_config = {
        "json_schema_extra": {"example": {"detail": "Invalid cursor", "code": "VALIDATION_ERROR"}}
    }
