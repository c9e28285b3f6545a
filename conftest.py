import pytest

from langreader.models import Book, Chapter, Paragraph, Word


def build_book(book_id, chapters):
    """chapters: {chapter_number: {paragraph_number: [word ids]}}"""
    return Book(
        id=book_id,
        title=book_id.title(),
        author="Test",
        language_code="ar",
        chapters=[
            Chapter(
                number=number,
                title=f"Chapter {number}",
                paragraphs=[
                    Paragraph(
                        id=f"c{number}-p{p_number}",
                        paragraph_number=p_number,
                        words=[Word(id=w, l2=f"{w}-l2", l1=f"{w}-l1") for w in word_ids],
                        translation_l1=f"Sentence {p_number}",
                    )
                    for p_number, word_ids in paragraphs.items()
                ],
            )
            for number, paragraphs in chapters.items()
        ],
    )


class FakeClock:
    def __init__(self, start=1000):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now


@pytest.fixture
def book_a():
    return build_book("book-a", {
        1: {1: ["a1", "a2"], 2: ["a3"]},
        2: {1: ["a4"], 3: ["a5", "a6"]},
    })


@pytest.fixture
def book_b():
    return build_book("book-b", {1: {1: ["b1", "b2", "b3"]}})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_book():
    return build_book
