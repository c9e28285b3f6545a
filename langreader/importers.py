import re
import json
import logging
import pandas as pd
from typing import List
from pydantic import ValidationError

from .models import Book, Chapter, Paragraph, Word

COLUMN_DELIMITER = "\t"
# Word pairs are separated by NO-BREAK SPACE, not regular spaces
PAIR_DELIMITER = "\u00a0"
WORD_DELIMITER = ": "
UNKNOWN_GLOSS = "???"


class BookImportError(ValueError):
    pass


def book_id_from_title(title: str) -> str:
    return re.sub(r"[^a-z0-9]", "-", title.lower())


def parse_word_pairs(word_by_word: str, paragraph_number: int) -> List[Word]:
    words = []
    for index, pair in enumerate(word_by_word.split(PAIR_DELIMITER)):
        if pair.strip() == "":
            continue
        pair_parts = pair.split(WORD_DELIMITER)
        if len(pair_parts) == 2:
            l2 = pair_parts[0].strip()
            l1 = re.sub(r",$", "", pair_parts[1].strip())
        else:
            l2 = pair.strip()
            l1 = UNKNOWN_GLOSS
            logging.warning(f"Could not split pair: {pair!r}")
        words.append(Word(id=f"p{paragraph_number}-w{index + 1}", l2=l2, l1=l1))
    return words


def parse_txt_to_book(content: str, title: str, language_code: str = "ha") -> Book:
    """
    Parses tab-separated text into a single-chapter Book.

    Each line reads: [L2 sentence] TAB [word: gloss<NBSP>word: gloss...] TAB [L1 sentence].
    """
    lines = pd.Series(content.split("\n"), dtype="object")
    lines = lines[lines.str.strip().str.len() > 0]

    paragraphs = []
    if not lines.empty:
        columns = lines.str.split(COLUMN_DELIMITER, expand=True)
        paragraph_number = 1
        for row_index, row in columns.iterrows():
            if columns.shape[1] < 3 or pd.isna(row[2]):
                logging.warning(f"Skipping malformed line: {lines[row_index]!r}")
                continue

            words = parse_word_pairs(row[1], paragraph_number)
            if not words:
                continue
            paragraphs.append(Paragraph(
                id=f"p{paragraph_number}",
                paragraph_number=paragraph_number,
                words=words,
                translation_l1=row[2].strip(),
            ))
            paragraph_number += 1

    if not paragraphs:
        raise BookImportError("The file was empty or contained no valid parsable lines. Check delimiters.")

    return Book(
        id=book_id_from_title(title),
        title=title,
        author="Imported from TXT",
        language_code=language_code,
        chapters=[Chapter(number=1, title="Chapter 1", paragraphs=paragraphs)],
    )


def parse_book_json(content: str) -> Book:
    try:
        data = json.loads(content)
    except ValueError as e:
        raise BookImportError(f"Failed to parse JSON: {e}") from e

    if not isinstance(data, dict) or not data.get("id") or not data.get("title") \
            or not isinstance(data.get("chapters"), list):
        raise BookImportError("Invalid JSON format. Expected a book with id, title and chapters.")

    try:
        return Book.model_validate(data)
    except ValidationError as e:
        raise BookImportError(f"Invalid book structure: {e}") from e
