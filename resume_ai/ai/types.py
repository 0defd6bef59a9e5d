from typing import Protocol


class GenerativeClient(Protocol):
    """Single-prompt text generation; raises on transport or provider failure."""

    @property
    def name(self) -> str: ...

    def generate(self, prompt: str) -> str: ...
