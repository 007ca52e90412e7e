"""Fill reply templates from an email analysis and the requester's form fields."""

import logging
from typing import Optional

from analyzer import analyze
from models import AnalysisResult, GeneratedReply, ReplyRequest

logger = logging.getLogger(__name__)

GREETINGS = {
    "professional": ("Hello {name},", "Hello,"),
    "personal": ("Hi {name},", "Hi there,"),
}

ACKNOWLEDGEMENTS = {
    ("professional", "positive"): "Thank you for your message and for your kind words.",
    ("professional", "neutral"): "Thank you for your message.",
    ("professional", "concerned"): (
        "Thank you for your message. I understand your concerns and I take them seriously."
    ),
    ("personal", "positive"): "Thanks so much for your message, it really made my day!",
    ("personal", "neutral"): "Thanks for your message.",
    ("personal", "concerned"): "Thanks for telling me. I can tell this is weighing on you and I want to help.",
}

URGENCY_LINES = {
    ("professional", "high"): (
        "I am treating this as a priority and will get back to you as quickly as possible."
    ),
    ("professional", "moderate"): "I will look into it shortly and keep you informed.",
    ("professional", "low"): "I have read it carefully.",
    ("personal", "high"): "I'm on it right now, I'll get back to you as fast as I can.",
    ("personal", "moderate"): "I'll take care of it soon.",
    ("personal", "low"): "No rush on my side, I just wanted to get back to you.",
}

TOPIC_LINES = {
    "professional": "I have taken note of the points regarding {topics}.",
    "personal": "I saw what you wrote about {topics}.",
}

QUESTION_INTROS = {
    "professional": "Regarding your questions:",
    "personal": "About your questions:",
}

QUESTION_ITEMS = {
    "professional": '- "{question}" I will come back to you with a precise answer.',
    "personal": '- "{question}" Let me check and I\'ll tell you.',
}

OUTCOME_LINES = {
    "professional": "With that in mind, I would like to propose the following: {outcome}",
    "personal": "Here is what I'd suggest: {outcome}",
}

NOTE_LINES = {
    "professional": "I would also like to add the following: {notes}",
    "personal": "Also, {notes}",
}

CLOSINGS = {
    "professional": "Please do not hesitate to contact me if you need any further information.",
    "personal": "Talk soon!",
}

SIGN_OFFS = {
    "professional": "Kind regards,",
    "personal": "Take care,",
}

SUBJECT_FALLBACKS = {
    "professional": "Re: Your message",
    "personal": "Re: Your news",
}

TOPIC_SUBJECTS = {
    "professional": "Re: {topic} follow-up",
    "personal": "About the {topic}",
}

MAX_TOPICS_MENTIONED = 3


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _as_sentence(value: str) -> str:
    if value.endswith((".", "!", "?")):
        return value
    return value + "."


def _join_topics(topics: list[str]) -> str:
    if len(topics) == 1:
        return topics[0]
    return ", ".join(topics[:-1]) + " and " + topics[-1]


def _greeting(request: ReplyRequest) -> str:
    named, generic = GREETINGS[request.context]
    name = _clean(request.sender_name) or _clean(request.recipient_name)
    return named.format(name=name) if name else generic


def suggest_subject(request: ReplyRequest, analysis: AnalysisResult) -> str:
    subject = _clean(request.subject)
    if subject:
        if subject.lower().startswith("re:"):
            return subject
        return f"Re: {subject}"
    if analysis.keywords:
        topic = analysis.keywords[0]
        if request.context == "professional":
            topic = topic[0].upper() + topic[1:]
        return TOPIC_SUBJECTS[request.context].format(topic=topic)
    return SUBJECT_FALLBACKS[request.context]


def render(request: ReplyRequest, analysis: AnalysisResult) -> GeneratedReply:
    context = request.context
    paragraphs = [
        _greeting(request),
        " ".join(
            (
                ACKNOWLEDGEMENTS[(context, analysis.sentiment)],
                URGENCY_LINES[(context, analysis.urgency)],
            )
        ),
    ]

    if analysis.keywords:
        topics = _join_topics(analysis.keywords[:MAX_TOPICS_MENTIONED])
        paragraphs.append(TOPIC_LINES[context].format(topics=topics))

    if analysis.questions:
        lines = [QUESTION_INTROS[context]]
        lines.extend(QUESTION_ITEMS[context].format(question=q) for q in analysis.questions)
        paragraphs.append("\n".join(lines))

    outcome = _clean(request.desired_outcome)
    if outcome:
        paragraphs.append(OUTCOME_LINES[context].format(outcome=_as_sentence(outcome)))

    notes = _clean(request.additional_notes)
    if notes:
        paragraphs.append(NOTE_LINES[context].format(notes=_as_sentence(notes)))

    paragraphs.append(CLOSINGS[context])
    paragraphs.append(_clean(request.user_signature) or SIGN_OFFS[context])

    reply = "\n\n".join(paragraphs)
    logger.debug(
        "Rendered reply (context=%s sentiment=%s urgency=%s chars=%d)",
        context,
        analysis.sentiment,
        analysis.urgency,
        len(reply),
    )
    return GeneratedReply(
        reply=reply,
        subject_suggestion=suggest_subject(request, analysis),
        analysis=analysis,
    )


def generate_email_response(request: ReplyRequest) -> GeneratedReply:
    return render(request, analyze(request.email_body))
