"""
Catalog loader tests.
"""

import pytest

from tobira.classroom import load_catalog, parse_catalog
from tobira.errors import CatalogError
from tobira.schemas import SEED_BOOKS


BOOK_YAML = """
books:
  - id: melos
    title: 走れメロス
    author: 太宰治
    difficulty: 1
    chapters:
      - id: 1
        title: 一
        original_text: メロスは激怒した。
        simple_text: メロスはとても怒りました。
        questions:
          - question: メロスはどんな気持ちでしたか。
            options: [怒っていた, うれしかった]
            answer: {answer}
"""


class TestBundledCatalog:

    def test_loads(self, catalog):
        assert catalog.book_ids() == [
            "kokoro-intro", "melos", "kokoro-complete", "hashire-melos-advanced", "kokoro-advanced",
        ]

    def test_contains_seed_books(self, catalog):
        assert SEED_BOOKS <= set(catalog.book_ids())

    def test_every_chapter_has_questions(self, catalog):
        for book in catalog.books:
            for chapter in book.chapters:
                assert chapter.questions, f"{book.id}/{chapter.id}"
                assert chapter.simple_text.strip()
                assert chapter.original_text.strip()


class TestLoadCatalog:

    def test_custom_file(self, tmp_path):
        path = tmp_path / "books.yaml"
        path.write_text(BOOK_YAML.format(answer="怒っていた"), encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.get_chapter("melos", 1).question_count == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "books.yaml"
        path.write_text("books: [\n  - id: melos", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_answer_not_in_options(self, tmp_path):
        path = tmp_path / "books.yaml"
        path.write_text(BOOK_YAML.format(answer="ねむかった"), encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_parse_bare_list(self):
        catalog = parse_catalog([{
            "id": "melos",
            "title": "走れメロス",
            "author": "太宰治",
            "difficulty": 1,
            "chapters": [{"id": 1, "title": "一", "original_text": "o", "simple_text": "s"}],
        }])
        assert catalog.book_ids() == ["melos"]

    def test_parse_rejects_scalar(self):
        with pytest.raises(CatalogError):
            parse_catalog("books")
