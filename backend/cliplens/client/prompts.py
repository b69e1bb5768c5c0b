"""
Canned prompt buttons of the search screen.
"""
from typing import Iterator, List, Optional

DEFAULT_PROMPTS = [
    "Find nudity",
    "Find swearing",
    "Find maps of India",
    "Find cigarettes",
    "Find alcohol bottles",
]


class PromptDeck:
    """Ordered, editable list of canned prompts."""

    def __init__(self, prompts: Optional[List[str]] = None):
        self.prompts = list(prompts if prompts is not None else DEFAULT_PROMPTS)

    def __len__(self) -> int:
        return len(self.prompts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.prompts)

    def __getitem__(self, index: int) -> str:
        return self.prompts[index]

    def duplicate(self, index: int) -> None:
        """Insert a copy right after the prompt at index."""
        self.prompts.insert(index + 1, self.prompts[index])

    def edit(self, index: int, text: str) -> None:
        self.prompts[index] = text
