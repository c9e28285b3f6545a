import time
import logging
import threading
from typing import Callable, Dict, List, Optional, Set
from pydantic import ValidationError

from .importers import parse_book_json, parse_txt_to_book
from .models import (
    Book, Flashcard, FlashcardSnapshot, SessionProgress, SessionScope, SessionState,
    Settings, SettingsUpdate, Word,
)
from .sample import sample_book
from .scheduling import NEVER_REVIEWED, due_queue, next_mastery, parse_rating, session_progress, session_word_ids
from .storage import JsonStore

FLASHCARD_RECORD = "langjson-flashcard-storage"
SETTINGS_RECORD = "langjson-settings-storage"
BOOK_RECORD = "langjson-book-storage"


def now_ms() -> int:
    return int(time.time() * 1000)


class FlashcardService:
    """Owns the deck: one card per word of the active book."""

    def __init__(self, store: JsonStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self.clock = clock
        self.cards: Dict[str, Flashcard] = {}

    def load_data(self) -> bool:
        """Loads the persisted snapshot. Returns False when there is none."""
        data = self.store.load(FLASHCARD_RECORD)
        if data is None:
            return False
        try:
            snapshot = FlashcardSnapshot.model_validate(data)
        except ValidationError as e:
            logging.warning(f"Ignoring invalid flashcard snapshot: {e}")
            return False
        self.cards = {card.id: card for card in snapshot.cards}
        return True

    def save_data(self):
        snapshot = FlashcardSnapshot(cards=list(self.cards.values()))
        self.store.save(FLASHCARD_RECORD, snapshot.model_dump(mode="json", by_alias=True))

    def initialize_deck(self, words: List[Word]):
        """Replaces the whole deck with fresh cards for `words`. No progress is carried over."""
        cards = {}
        for word in words:
            if word.id in cards:
                logging.warning(f"Duplicate word id {word.id}, keeping the first occurrence")
                continue
            cards[word.id] = Flashcard.from_word(word)
        self.cards = cards
        self.save_data()
        logging.info(f"Initialized deck with {len(self.cards)} cards")

    def card_ids(self) -> List[str]:
        return list(self.cards)

    def list_cards(self) -> List[Flashcard]:
        return list(self.cards.values())

    def get_card(self, card_id: str) -> Optional[Flashcard]:
        return self.cards.get(card_id)

    def update_card_mastery(self, card_id: str, rating) -> bool:
        """
        Applies a rating to one card and stamps its review time.

        Raises InvalidRatingError for an unknown rating. An unknown card id is
        a no-op; the return value tells whether a card was updated.
        """
        rating = parse_rating(rating)
        card = self.cards.get(card_id)
        if card is None:
            logging.warning(f"Review for unknown card {card_id} ignored")
            return False

        previous = card.last_reviewed if card.last_reviewed is not None else NEVER_REVIEWED
        self.cards[card_id] = card.model_copy(update={
            "mastery": next_mastery(card.mastery, rating),
            "last_reviewed": max(self.clock(), previous),
        })
        self.save_data()
        return True

    def reset_progress(self):
        self.cards = {
            card_id: card.model_copy(update={"mastery": 0, "last_reviewed": None})
            for card_id, card in self.cards.items()
        }
        self.save_data()

    def due_queue(self, word_ids: Set[str]) -> List[Flashcard]:
        return due_queue(self.cards.values(), word_ids)

    def progress(self, word_ids: Set[str]) -> SessionProgress:
        mastered, total, fraction = session_progress(self.cards.values(), word_ids)
        return SessionProgress(mastered=mastered, total=total, fraction=fraction)


class SettingsService:
    """Display preferences. Not used by the scheduling logic."""

    def __init__(self, store: JsonStore):
        self.store = store
        self.settings = Settings()

    def load_data(self) -> bool:
        data = self.store.load(SETTINGS_RECORD)
        if data is None:
            return False
        try:
            self.settings = Settings.model_validate(data)
        except ValidationError as e:
            logging.warning(f"Ignoring invalid settings record: {e}")
            self.settings = Settings()
            return False
        return True

    def save_data(self):
        self.store.save(SETTINGS_RECORD, self.settings.model_dump(mode="json", by_alias=True))

    def update(self, changes: SettingsUpdate) -> Settings:
        values = self.settings.model_dump()
        values.update(changes.model_dump(exclude_none=True))
        self.settings = Settings.model_validate(values)
        self.save_data()
        return self.settings

    def set_theme(self, theme: str) -> Settings:
        return self.update(SettingsUpdate(theme=theme))

    def set_font_size(self, size: str) -> Settings:
        return self.update(SettingsUpdate(font_size=size))

    def set_translation_language(self, language: str) -> Settings:
        return self.update(SettingsUpdate(translation_language=language))

    def set_script_font(self, font: str) -> Settings:
        return self.update(SettingsUpdate(script_font=font))

    def toggle_word_by_word(self) -> Settings:
        return self.update(SettingsUpdate(show_word_by_word=not self.settings.show_word_by_word))

    def toggle_rtl(self) -> Settings:
        return self.update(SettingsUpdate(is_rtl=not self.settings.is_rtl))


class ReaderService:
    """
    The active book and its deck.

    All reads and writes go through one lock so that a book replacement and
    the deck rebuild it triggers are never observed separately, and every
    rating is saved before the next due queue is computed.
    """

    def __init__(self, store: JsonStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self.flashcards = FlashcardService(store, clock)
        self.settings = SettingsService(store)
        self.book: Optional[Book] = None
        self._lock = threading.RLock()

    def load_data(self):
        """Loads the persisted book, deck and settings, falling back to the sample book."""
        with self._lock:
            book = None
            data = self.store.load(BOOK_RECORD)
            if data is not None:
                try:
                    book = Book.model_validate(data)
                except ValidationError as e:
                    logging.warning(f"Ignoring invalid book record: {e}")
            if book is None:
                book = sample_book()
            self.book = book
            self.settings.load_data()

            word_ids = list(dict.fromkeys(w.id for w in book.all_words()))
            if not self.flashcards.load_data() or self.flashcards.card_ids() != word_ids:
                logging.info(f"Deck does not match book {book.id}, rebuilding")
                self.flashcards.initialize_deck(book.all_words())

    def _ensure_loaded(self):
        if self.book is None:
            self.load_data()

    def get_book(self) -> Book:
        with self._lock:
            self._ensure_loaded()
            return self.book

    def load_book(self, book: Book) -> Book:
        """Makes `book` the active document and rebuilds the deck from it."""
        with self._lock:
            self._ensure_loaded()
            self.book = book
            self.store.save(BOOK_RECORD, book.model_dump(mode="json", by_alias=True))
            self.flashcards.initialize_deck(book.all_words())
            logging.info(f"Loaded book {book.id} ({book.title})")
            return book

    def import_json(self, content: str) -> Book:
        return self.load_book(parse_book_json(content))

    def import_txt(self, content: str, title: str, language_code: str = "ha") -> Book:
        return self.load_book(parse_txt_to_book(content, title, language_code))

    def find_word(self, word_id: str) -> Optional[Word]:
        for word in self.get_book().all_words():
            if word.id == word_id:
                return word
        return None

    def list_cards(self) -> List[Flashcard]:
        with self._lock:
            self._ensure_loaded()
            return self.flashcards.list_cards()

    def review_card(self, card_id: str, rating) -> bool:
        with self._lock:
            self._ensure_loaded()
            return self.flashcards.update_card_mastery(card_id, rating)

    def reset_progress(self):
        with self._lock:
            self._ensure_loaded()
            self.flashcards.reset_progress()

    def preview_count(self, scope: SessionScope) -> int:
        """Number of words (repeats included) a session over `scope` covers."""
        start, end = scope.start_paragraph_number, scope.end_paragraph_number
        if start > end:
            return 0
        return sum(
            len(p.words) for p in self.get_book().all_paragraphs()
            if start <= p.paragraph_number <= end
        )

    def session_state(self, scope: SessionScope) -> SessionState:
        with self._lock:
            word_ids = session_word_ids(self.get_book(), scope.start_paragraph_number, scope.end_paragraph_number)
            queue = self.flashcards.due_queue(word_ids)
            return SessionState(
                card=queue[0] if queue else None,
                finished=not queue,
                remaining=len(queue),
                progress=self.flashcards.progress(word_ids),
            )

    def review_current(self, scope: SessionScope, rating) -> SessionState:
        """Rates the card at the head of the session's due queue, then recomputes the session."""
        with self._lock:
            state = self.session_state(scope)
            if state.card is None:
                parse_rating(rating)
                return state
            self.flashcards.update_card_mastery(state.card.id, rating)
            return self.session_state(scope)

    def get_settings(self) -> Settings:
        with self._lock:
            self._ensure_loaded()
            return self.settings.settings

    def update_settings(self, changes: SettingsUpdate) -> Settings:
        with self._lock:
            self._ensure_loaded()
            return self.settings.update(changes)

    def toggle_word_by_word(self) -> Settings:
        with self._lock:
            self._ensure_loaded()
            return self.settings.toggle_word_by_word()

    def toggle_rtl(self) -> Settings:
        with self._lock:
            self._ensure_loaded()
            return self.settings.toggle_rtl()
