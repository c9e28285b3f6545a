import json
import pytest

from langreader.importers import BookImportError, book_id_from_title, parse_book_json, parse_txt_to_book
from langreader.sample import SAMPLE_BOOK

NBSP = "\u00a0"


def tsv_line(l2_sentence, pairs, l1_sentence):
    return "\t".join([l2_sentence, NBSP.join(pairs), l1_sentence])


def test_parse_txt_builds_single_chapter_book():
    content = "\n".join([
        tsv_line("Ina kwana", ["Ina: How", "kwana: night,"], "Good morning "),
        "",
        tsv_line("Lafiya lau", ["Lafiya: health", "lau: fine"], "Fine"),
    ])
    book = parse_txt_to_book(content, "Hausa Greetings!")

    assert book.id == "hausa-greetings-"
    assert book.author == "Imported from TXT"
    assert book.language_code == "ha"
    assert len(book.chapters) == 1
    chapter = book.chapters[0]
    assert (chapter.number, chapter.title) == (1, "Chapter 1")

    first, second = chapter.paragraphs
    assert (first.id, first.paragraph_number, first.translation_l1) == ("p1", 1, "Good morning")
    assert [(w.id, w.l2, w.l1) for w in first.words] == [("p1-w1", "Ina", "How"), ("p1-w2", "kwana", "night")]
    assert second.paragraph_number == 2
    assert [w.id for w in second.words] == ["p2-w1", "p2-w2"]


def test_parse_txt_skips_malformed_lines():
    content = "\n".join([
        "only one column",
        "two\tcolumns",
        tsv_line("ok", ["a: b"], "fine"),
    ])
    book = parse_txt_to_book(content, "t")
    paragraphs = book.chapters[0].paragraphs
    assert len(paragraphs) == 1
    assert paragraphs[0].id == "p1"


def test_parse_txt_extra_columns_are_ignored():
    content = tsv_line("s", ["a: b"], "t") + "\textra"
    book = parse_txt_to_book(content, "t")
    assert book.chapters[0].paragraphs[0].translation_l1 == "t"


def test_parse_txt_unsplittable_pair_gets_placeholder():
    book = parse_txt_to_book(tsv_line("s", ["lonely", "x: y: z"], "t"), "t")
    words = book.chapters[0].paragraphs[0].words
    assert [(w.l2, w.l1) for w in words] == [("lonely", "???"), ("x: y: z", "???")]


def test_parse_txt_word_index_counts_empty_pairs():
    book = parse_txt_to_book(tsv_line("s", ["a: 1", "", "b: 2"], "t"), "t")
    assert [w.id for w in book.chapters[0].paragraphs[0].words] == ["p1-w1", "p1-w3"]


def test_parse_txt_line_without_words_does_not_take_a_number():
    content = "\n".join([
        tsv_line("s", [" "], "t"),
        tsv_line("s", ["a: b"], "t"),
    ])
    paragraphs = parse_txt_to_book(content, "t").chapters[0].paragraphs
    assert [p.paragraph_number for p in paragraphs] == [1]


def test_parse_txt_handles_windows_line_endings():
    content = tsv_line("s", ["a: b"], "t1") + "\r\n" + tsv_line("s", ["c: d"], "t2") + "\r\n"
    paragraphs = parse_txt_to_book(content, "t").chapters[0].paragraphs
    assert [p.translation_l1 for p in paragraphs] == ["t1", "t2"]


@pytest.mark.parametrize("content", ["", "\n\n  \n", "no tabs here\nnor here"])
def test_parse_txt_without_paragraphs_raises(content):
    with pytest.raises(BookImportError):
        parse_txt_to_book(content, "t")


def test_book_id_from_title():
    assert book_id_from_title("The Little Prince (AR)") == "the-little-prince--ar-"


def test_parse_book_json_accepts_sample():
    book = parse_book_json(json.dumps(SAMPLE_BOOK, ensure_ascii=False))
    assert book.id == "lp-ar"
    assert book.chapters[0].paragraphs[2].words[4].l1 == "a sheep"


@pytest.mark.parametrize("content", [
    "{not json",
    "[]",
    json.dumps({"title": "no id", "chapters": []}),
    json.dumps({"id": "x", "title": "t", "chapters": "nope"}),
    json.dumps({"id": "x", "title": "t", "chapters": [{"number": 1, "paragraphs": [{"id": "p1"}]}]}),
])
def test_parse_book_json_rejects_bad_input(content):
    with pytest.raises(BookImportError):
        parse_book_json(content)
