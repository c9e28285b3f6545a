"""Mastery-counter scheduling for the flashcard deck.

This is not interval scheduling: a card is due as long as its mastery is
below MAX_MASTERY, and the due queue is ordered by mastery, then by the
time of the last review.
"""
from enum import Enum
from typing import Iterable, List, Set

MAX_MASTERY = 5

# Sort value used for cards that were never reviewed (the epoch).
NEVER_REVIEWED = 0


class Rating(str, Enum):
    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


class InvalidRatingError(ValueError):
    def __init__(self, rating):
        super().__init__(f"Invalid rating: {rating!r} (expected one of {[r.value for r in Rating]})")
        self.rating = rating


def parse_rating(rating) -> Rating:
    if isinstance(rating, Rating):
        return rating
    try:
        return Rating(rating)
    except ValueError:
        raise InvalidRatingError(rating) from None


def next_mastery(mastery: int, rating) -> int:
    """
    Applies a reviewer rating to a mastery level.

    'again' resets to 0 and 'hard' demotes to 1 whatever the current level;
    'good' and 'easy' add 1 and 2, clamped to MAX_MASTERY.
    """
    rating = parse_rating(rating)
    if rating is Rating.AGAIN:
        new_mastery = 0
    elif rating is Rating.HARD:
        new_mastery = 1
    elif rating is Rating.GOOD:
        new_mastery = mastery + 1
    else:
        new_mastery = mastery + 2
    return max(0, min(new_mastery, MAX_MASTERY))


def is_mastered(card) -> bool:
    return card.mastery >= MAX_MASTERY


def review_sort_key(card):
    last_reviewed = card.last_reviewed if card.last_reviewed is not None else NEVER_REVIEWED
    return (card.mastery, last_reviewed)


def session_word_ids(book, start_paragraph_number: int, end_paragraph_number: int) -> Set[str]:
    """Word ids of every paragraph, in any chapter, whose number is within the inclusive range."""
    if start_paragraph_number > end_paragraph_number:
        return set()
    return {
        word.id
        for paragraph in book.all_paragraphs()
        if start_paragraph_number <= paragraph.paragraph_number <= end_paragraph_number
        for word in paragraph.words
    }


def due_queue(cards: Iterable, word_ids: Set[str]) -> List:
    """
    Cards of the session that still need review, least known first.

    Ties on mastery go to the oldest (or never) reviewed card; sorted() is
    stable so full ties keep deck order.
    """
    due = [c for c in cards if c.id in word_ids and not is_mastered(c)]
    return sorted(due, key=review_sort_key)


def session_progress(cards: Iterable, word_ids: Set[str]):
    """Returns (mastered, total, fraction) for a session's word set."""
    total = len(word_ids)
    mastered = sum(1 for c in cards if c.id in word_ids and is_mastered(c))
    fraction = mastered / total if total > 0 else 0.0
    return mastered, total, fraction
