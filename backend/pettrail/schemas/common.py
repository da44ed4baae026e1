from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ValidationIssue(BaseModel):
    field: str
    issue: str


class ErrorResponse(BaseModel):
    code: str  # VALIDATION_ERROR, NOT_FOUND, CONFLICT, INTERNAL_ERROR
    message: str
    details: list[ValidationIssue] = []
