"""The ingredient dictionary: a monotonically growing ``word -> id`` map."""

from typing import Dict, Mapping, Protocol


class DictionaryStore(Protocol):
    async def load(self) -> Dict[str, int]:
        ...

    async def add_words(self, words: Mapping[str, int]) -> None:
        """Persist new entries. Existing words keep their id."""
        ...


class MemoryDictionaryStore:
    def __init__(self, words: Mapping[str, int] | None = None) -> None:
        self._words: Dict[str, int] = dict(words or {})

    async def load(self) -> Dict[str, int]:
        return dict(self._words)

    async def add_words(self, words: Mapping[str, int]) -> None:
        for word, value in words.items():
            self._words.setdefault(word, value)
