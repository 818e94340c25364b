"""Segment value object: one indivisible unit handed to the packing step."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Segment:
    """A sentence, paragraph, section or separator-delimited piece of text."""

    text: str
    token_count: int
    start_offset: int | None = None

    @property
    def end_offset(self) -> int | None:
        if self.start_offset is None:
            return None
        return self.start_offset + len(self.text)
