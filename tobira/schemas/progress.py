"""
Progress schemas for Tobira.

Defines the single persisted UserProgress record. The record is an
immutable value: the progression engine returns a new instance for every
update.

Wire format (JSON, camelCase keys):
    {"level": 1, "experience": 0, "completedChapters": [],
     "unlockedBooks": ["kokoro-intro", "melos"]}
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_serializer, model_validator


EXPERIENCE_PER_LEVEL = 100
SEED_BOOKS: frozenset[str] = frozenset({"kokoro-intro", "melos"})


def chapter_key(book_id: str, chapter_id: int) -> str:
    """Completion key for a chapter: "<book_id>-<chapter_id>"."""
    return f"{book_id}-{chapter_id}"


class UserProgress(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: StrictInt = Field(default=1, ge=1)
    experience: StrictInt = Field(default=0, ge=0)
    completed_chapters: frozenset[StrictStr] = Field(
        default=frozenset(), alias="completedChapters"
    )
    unlocked_books: frozenset[StrictStr] = Field(
        default=SEED_BOOKS, alias="unlockedBooks"
    )

    @model_validator(mode="after")
    def check_invariants(self):
        # level is derived from experience, never stored independently
        expected = self.experience // EXPERIENCE_PER_LEVEL + 1
        if self.level != expected:
            raise ValueError(
                f"level {self.level} does not match experience {self.experience} "
                f"(expected {expected})"
            )
        missing = SEED_BOOKS - self.unlocked_books
        if missing:
            raise ValueError(f"unlockedBooks is missing seed books: {sorted(missing)}")
        return self

    @field_serializer("completed_chapters", "unlocked_books")
    def serialize_sorted(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    def is_chapter_completed(self, book_id: str, chapter_id: int) -> bool:
        return chapter_key(book_id, chapter_id) in self.completed_chapters

    def is_book_unlocked(self, book_id: str) -> bool:
        return book_id in self.unlocked_books

    def to_json_dict(self) -> dict:
        """Serialize to the wire format (camelCase keys, sorted lists)."""
        return self.model_dump(mode="json", by_alias=True)
