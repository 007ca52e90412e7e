import logging
import re

from lexicon import (
    ALL_CAPS_WORD_THRESHOLD,
    EXCLAMATION_DENSITY_THRESHOLD,
    INTERROGATIVES,
    URGENCY_HIGH_THRESHOLD,
    URGENCY_MODERATE_THRESHOLD,
    get_lexicon,
)
from models import AnalysisResult

logger = logging.getLogger(__name__)

_SENTENCE_RE = re.compile(r"[^.!?\n]+[.!?]*")
_FIRST_WORD_RE = re.compile(r"[a-z]+")
_EXCLAMATION_RUN_RE = re.compile(r"!{2,}")
_ALL_CAPS_RE = re.compile(r"\b[A-Z]{3,}\b")


def _weighted_count(text: str, cues) -> int:
    return sum(weight * len(pattern.findall(text)) for pattern, weight in cues)


def extract_keywords(text: str) -> list[str]:
    found: list[tuple[int, str]] = []
    for term, pattern in get_lexicon()["topics"]:
        match = pattern.search(text)
        if match:
            found.append((match.start(), term))
    found.sort(key=lambda item: item[0])
    return [term for _, term in found]


def score_sentiment(text: str) -> int:
    lexicon = get_lexicon()
    return _weighted_count(text, lexicon["positive"]) - _weighted_count(text, lexicon["concern"])


def classify_sentiment(score: int) -> str:
    if score > 0:
        return "positive"
    if score < 0:
        return "concerned"
    return "neutral"


def score_urgency(text: str) -> int:
    lexicon = get_lexicon()
    points = _weighted_count(text, lexicon["urgency"])
    points += len(_EXCLAMATION_RUN_RE.findall(text))
    if text.count("!") >= EXCLAMATION_DENSITY_THRESHOLD:
        points += 1
    shouting = [
        word
        for word in _ALL_CAPS_RE.findall(text)
        if word.lower() not in lexicon["urgency_terms"]
    ]
    if len(shouting) >= ALL_CAPS_WORD_THRESHOLD:
        points += 1
    return points


def classify_urgency(points: int) -> str:
    if points >= URGENCY_HIGH_THRESHOLD:
        return "high"
    if points >= URGENCY_MODERATE_THRESHOLD:
        return "moderate"
    return "low"


def _is_question(sentence: str) -> bool:
    if sentence.endswith("?"):
        return True
    first = _FIRST_WORD_RE.match(sentence.lower())
    return bool(first) and first.group(0) in INTERROGATIVES


def extract_questions(text: str) -> list[str]:
    questions = []
    for raw in _SENTENCE_RE.findall(text):
        sentence = raw.strip()
        if sentence and _is_question(sentence):
            questions.append(sentence)
    return questions


def analyze(text: str) -> AnalysisResult:
    text = text or ""
    score = score_sentiment(text)
    urgency_points = score_urgency(text)
    result = AnalysisResult(
        sentiment=classify_sentiment(score),
        sentiment_score=score,
        keywords=extract_keywords(text),
        questions=extract_questions(text),
        urgency=classify_urgency(urgency_points),
    )
    logger.debug(
        "Analysis sentiment=%s (%d) urgency=%s (%d points) keywords=%d questions=%d",
        result.sentiment,
        score,
        result.urgency,
        urgency_points,
        len(result.keywords),
        len(result.questions),
    )
    return result
