"""Validation of raw contact payloads.

Turns whatever arrived in the request body into one of three tagged
results so the handler can branch on the type instead of digging through
pydantic's error list.
"""

import logging
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError

from portfolio.models.contact import ContactSubmission, FlattenedErrors

logger = logging.getLogger(__name__)

# Email errors that mean "not supplied" rather than "badly formed".
EMAIL_PRESENCE_ERRORS = {"missing", "string_type"}


class ValidSubmission(BaseModel):
    data: ContactSubmission


class FieldError(BaseModel):
    field: str
    message: str


class SchemaError(BaseModel):
    violations: FlattenedErrors = Field(default_factory=FlattenedErrors)


ValidationResult = Union[ValidSubmission, FieldError, SchemaError]


def flatten_errors(errors: List[Dict[str, Any]]) -> FlattenedErrors:
    """Group pydantic errors by top-level field.

    Errors without a location (e.g. the body was not an object) go to
    ``formErrors``.
    """
    flattened = FlattenedErrors()
    for error in errors:
        loc = error.get("loc") or ()
        if not loc:
            flattened.formErrors.append(error["msg"])
            continue
        flattened.fieldErrors.setdefault(str(loc[0]), []).append(error["msg"])
    return flattened


def validate_submission(payload: Any) -> ValidationResult:
    """Check a parsed request body against the ContactSubmission shape.

    Args:
        payload: Parsed JSON body, any type

    Returns:
        ValidSubmission on success, FieldError when the email is present but
        malformed (this wins over other violations), SchemaError otherwise
    """
    try:
        submission = ContactSubmission.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        for error in errors:
            loc = error.get("loc") or ()
            if loc and loc[0] == "email" and error["type"] not in EMAIL_PRESENCE_ERRORS:
                return FieldError(field="email", message=error["msg"])
        logger.info(f"Contact payload rejected with {len(errors)} violation(s)")
        return SchemaError(violations=flatten_errors(errors))
    return ValidSubmission(data=submission)
