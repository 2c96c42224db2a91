from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Iterable

from tagnotes.core.errors import StorageReadError


@dataclass(frozen=True)
class Note:
    text: str
    tags: list[str] = field(default_factory=list)
    completed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data) -> "Note":
        if not isinstance(data, dict):
            raise StorageReadError(f"note entry must be an object, got {type(data).__name__}")

        text = data.get("text")
        tags = data.get("tags", [])
        completed = data.get("completed", False)

        if not isinstance(text, str):
            raise StorageReadError("note entry has no text")
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise StorageReadError("note tags must be a list of strings")
        if not isinstance(completed, bool):
            raise StorageReadError("note completed flag must be a boolean")

        return cls(text=text, tags=list(tags), completed=completed)


@dataclass(frozen=True)
class EditDraft:
    """Field contents for a note that is about to be edited."""
    text: str
    tags_input: str


def split_tags(tags_input: str) -> list[str]:
    """
    Literal comma split, no trimming.

    "a, b" -> ["a", " b"], "" -> [""].
    """
    return (tags_input or "").split(",")


def join_tags(tags: Iterable[str]) -> str:
    return ", ".join(tags)


def notes_to_blob(notes: Iterable[Note]) -> str:
    return json.dumps([n.to_dict() for n in notes], ensure_ascii=False)


def notes_from_blob(blob: str) -> list[Note]:
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise StorageReadError(f"notes blob is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise StorageReadError(f"notes blob must be a JSON array, got {type(data).__name__}")

    return [Note.from_dict(item) for item in data]
