import re
from datetime import datetime, timezone

from qaforum.models.question_models import Question

ORDERS = ("newest", "unanswered", "active", "mostViewed")

_TAG_PATTERN = re.compile(r"\[([^\]]+)\]")
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_search(search: str) -> tuple[set[str], set[str]]:
    """Split a search string into ``[tag]`` names and plain keywords, lowercased."""
    tags = {tag.strip().lower() for tag in _TAG_PATTERN.findall(search) if tag.strip()}
    keywords = {word.lower() for word in _TAG_PATTERN.sub(" ", search).split()}
    return tags, keywords


def filter_questions_by_search(questions: list[Question], search: str) -> list[Question]:
    tags, keywords = parse_search(search)
    if not tags and not keywords:
        return list(questions)

    def matches(question: Question) -> bool:
        if any(tag.name.lower() in tags for tag in question.tags):
            return True
        title, text = question.title.lower(), question.text.lower()
        return any(word in title or word in text for word in keywords)

    return [q for q in questions if matches(q)]


def _latest_answer(question: Question) -> datetime:
    return max((a.ansDateTime for a in question.answers), default=_EPOCH)


def order_questions(questions: list[Question], order: str) -> list[Question]:
    # every order breaks ties newest first; sorted() is stable
    newest = sorted(questions, key=lambda q: q.askDateTime, reverse=True)
    if order == "newest":
        return newest
    if order == "unanswered":
        return [q for q in newest if not q.answers]
    if order == "active":
        return sorted(newest, key=lambda q: (bool(q.answers), _latest_answer(q)), reverse=True)
    if order == "mostViewed":
        return sorted(newest, key=lambda q: len(q.views), reverse=True)
    raise ValueError(f"Unknown order: {order}")
