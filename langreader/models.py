from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal

from .scheduling import MAX_MASTERY, Rating


class CamelModel(BaseModel):
    # camelCase on the wire and in the persisted records
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Word(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    l2: str
    l1: str
    pronunciation: Optional[str] = None


class Paragraph(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    paragraph_number: int
    words: List[Word] = Field(default_factory=list)
    translation_l1: str = ""


class Chapter(CamelModel):
    model_config = ConfigDict(frozen=True)

    number: int
    title: str = ""
    paragraphs: List[Paragraph] = Field(default_factory=list)


class Book(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    author: str = ""
    language_code: str = ""
    chapters: List[Chapter]

    def all_paragraphs(self) -> List[Paragraph]:
        """Paragraphs of every chapter, in document order."""
        return [p for chapter in self.chapters for p in chapter.paragraphs]

    def all_words(self) -> List[Word]:
        """Chapter order, then paragraph order, then word order."""
        return [w for p in self.all_paragraphs() for w in p.words]


class Flashcard(CamelModel):
    id: str
    l2: str
    l1: str
    pronunciation: Optional[str] = None
    mastery: int = Field(default=0, ge=0, le=MAX_MASTERY)
    # milliseconds since the epoch, None when never reviewed
    last_reviewed: Optional[int] = None

    @classmethod
    def from_word(cls, word: Word) -> "Flashcard":
        return cls(id=word.id, l2=word.l2, l1=word.l1, pronunciation=word.pronunciation)


class FlashcardSnapshot(CamelModel):
    cards: List[Flashcard] = Field(default_factory=list)


class SessionScope(CamelModel):
    start_paragraph_number: int
    end_paragraph_number: int


Theme = Literal["light", "dark", "sepia"]
FontSize = Literal["sm", "base", "lg"]
ScriptFont = Literal["uthmani", "indopak", "latin-serif"]


class Settings(CamelModel):
    theme: Theme = "dark"
    font_size: FontSize = "base"
    show_word_by_word: bool = True
    translation_language: str = "English"
    script_font: ScriptFont = "uthmani"
    is_rtl: bool = True


class SettingsUpdate(CamelModel):
    theme: Optional[Theme] = None
    font_size: Optional[FontSize] = None
    show_word_by_word: Optional[bool] = None
    translation_language: Optional[str] = None
    script_font: Optional[ScriptFont] = None
    is_rtl: Optional[bool] = None


class ReviewRequest(CamelModel):
    rating: Rating


class SessionReviewRequest(SessionScope):
    rating: Rating


class ImportJsonRequest(CamelModel):
    content: str


class ImportTxtRequest(CamelModel):
    content: str
    title: str
    language_code: str = "ha"


class SessionProgress(CamelModel):
    mastered: int
    total: int
    fraction: float


class SessionState(CamelModel):
    card: Optional[Flashcard] = None
    finished: bool
    remaining: int
    progress: SessionProgress
