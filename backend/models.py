import logging
import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

Context = Literal["professional", "personal"]
Sentiment = Literal["positive", "neutral", "concerned"]
Urgency = Literal["high", "moderate", "low"]

DEFAULT_MIN_BODY_LENGTH = 10


def min_email_body_length() -> int:
    try:
        return max(1, int(os.getenv("MIN_EMAIL_BODY_LENGTH", str(DEFAULT_MIN_BODY_LENGTH))))
    except ValueError:
        logger.warning("Invalid MIN_EMAIL_BODY_LENGTH; defaulting to %d", DEFAULT_MIN_BODY_LENGTH)
        return DEFAULT_MIN_BODY_LENGTH


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisResult(_CamelModel):
    """Heuristic reading of a received email."""

    sentiment: Sentiment = "neutral"
    sentiment_score: int = 0
    keywords: list[str] = Field(default_factory=list)
    questions: list[str] = Field(default_factory=list)
    urgency: Urgency = "low"


class ReplyRequest(_CamelModel):
    context: Context
    email_body: str
    sender_name: Optional[str] = None
    recipient_name: Optional[str] = None
    subject: Optional[str] = None
    desired_outcome: Optional[str] = None
    additional_notes: Optional[str] = None
    user_signature: Optional[str] = None

    @field_validator(
        "sender_name",
        "recipient_name",
        "subject",
        "desired_outcome",
        "additional_notes",
        "user_signature",
        mode="before",
    )
    @classmethod
    def _ignore_non_strings(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("email_body")
    @classmethod
    def _check_body_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < min_email_body_length():
            raise ValueError("email body too short")
        return value


class GeneratedReply(_CamelModel):
    reply: str
    subject_suggestion: str
    analysis: AnalysisResult
