"""Error value returned by the annotator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from errnote.annotator.models import Record


class AnnotatedError(Exception):
    """String-backed error that carries the record it was rendered from."""

    def __init__(self, text: str, record: Optional["Record"] = None) -> None:
        super().__init__(text)
        self.text = text
        self.record = record

    def __str__(self) -> str:
        return self.text

    @classmethod
    def from_text(cls, text: str) -> "AnnotatedError":
        """Rebuild an error from rendered text, recovering the record when it decodes."""
        from errnote.annotator.models import decode_record

        return cls(text, decode_record(text))
