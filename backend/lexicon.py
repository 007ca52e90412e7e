import os
import re
from functools import lru_cache
from typing import Any

TOPIC_TERMS = (
    "project",
    "deadline",
    "budget",
    "meeting",
    "contract",
    "invoice",
    "payment",
    "proposal",
    "quote",
    "report",
    "schedule",
    "delivery",
    "order",
    "client",
    "customer",
    "presentation",
    "review",
    "feedback",
    "team",
    "planning",
    "appointment",
    "interview",
    "training",
    "launch",
    "update",
    "document",
    "file",
    "call",
    "event",
    "weekend",
    "dinner",
    "lunch",
    "birthday",
    "holiday",
    "vacation",
    "trip",
    "party",
    "family",
    "wedding",
)

# term -> weight
POSITIVE_CUES = {
    "thank you": 1,
    "thanks": 1,
    "grateful": 1,
    "appreciate": 1,
    "glad": 1,
    "happy": 1,
    "pleased": 1,
    "great": 1,
    "good news": 2,
    "excellent": 2,
    "wonderful": 2,
    "delighted": 2,
    "congratulations": 2,
    "perfect": 1,
    "love": 1,
}

CONCERN_CUES = {
    "problem": 1,
    "issue": 1,
    "concern": 1,
    "concerned": 1,
    "worried": 1,
    "unfortunately": 1,
    "delay": 1,
    "delayed": 1,
    "late": 1,
    "error": 1,
    "mistake": 1,
    "bug": 1,
    "broken": 1,
    "failed": 1,
    "sorry": 1,
    "complaint": 2,
    "disappointed": 2,
    "frustrated": 2,
    "angry": 2,
    "unacceptable": 2,
}

URGENCY_CUES = {
    "urgent": 2,
    "urgently": 2,
    "asap": 2,
    "as soon as possible": 2,
    "immediately": 2,
    "emergency": 2,
    "critical": 2,
    "right away": 2,
    "today": 1,
    "tonight": 1,
    "tomorrow": 1,
    "soon": 1,
    "quickly": 1,
    "priority": 1,
    "deadline": 1,
    "reminder": 1,
    "please respond": 1,
    "waiting for": 1,
}

INTERROGATIVES = frozenset(
    {"who", "whom", "whose", "what", "when", "where", "which", "why", "how"}
)

# Sentiment score buckets: > 0 positive, < 0 concerned, 0 neutral.
URGENCY_HIGH_THRESHOLD = 3
URGENCY_MODERATE_THRESHOLD = 1
EXCLAMATION_DENSITY_THRESHOLD = 3
ALL_CAPS_WORD_THRESHOLD = 2


def _term_pattern(term: str, allow_plural: bool = False) -> re.Pattern[str]:
    # Terms may end in punctuation ("c++"), where \b cannot close the match.
    parts = [re.escape(part) for part in term.split()]
    suffix = "s?" if allow_plural else ""
    return re.compile(r"(?<!\w)" + r"\s+".join(parts) + suffix + r"(?!\w)", re.IGNORECASE)


def _extra_topic_terms() -> list[str]:
    raw = os.getenv("EXTRA_TOPIC_KEYWORDS", "")
    return [term.strip() for term in raw.split(",") if term.strip()]


@lru_cache(maxsize=1)
def get_lexicon() -> dict[str, Any]:
    topics: list[str] = []
    seen: set[str] = set()
    for term in (*TOPIC_TERMS, *_extra_topic_terms()):
        if term.lower() not in seen:
            seen.add(term.lower())
            topics.append(term)

    return {
        "topics": [(term, _term_pattern(term, allow_plural=True)) for term in topics],
        "positive": [(_term_pattern(term), weight) for term, weight in POSITIVE_CUES.items()],
        "concern": [
            (_term_pattern(term, allow_plural=True), weight) for term, weight in CONCERN_CUES.items()
        ],
        "urgency": [
            (_term_pattern(term, allow_plural=True), weight) for term, weight in URGENCY_CUES.items()
        ],
        "urgency_terms": frozenset(URGENCY_CUES),
    }


def refresh_lexicon():
    get_lexicon.cache_clear()
