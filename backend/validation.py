from typing import Any

from pydantic import ValidationError

from models import ReplyRequest, min_email_body_length

MISSING_DATA = "Invalid request: missing data."
INVALID_CONTEXT = "The context must be 'professional' or 'personal'."


class InvalidInput(ValueError):
    """Raised when an inbound reply request cannot be handed to the composer."""


def _describe(exc: ValidationError) -> str:
    fields = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
    if not fields:
        return MISSING_DATA
    if fields & {"emailBody", "email_body"}:
        return f"The email body must contain at least {min_email_body_length()} characters."
    if "context" in fields:
        return INVALID_CONTEXT
    return MISSING_DATA


def parse_reply_request(payload: Any) -> ReplyRequest:
    try:
        return ReplyRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInput(_describe(exc)) from exc
