from abc import ABC, abstractmethod
from typing import Any


class Renderer(ABC):
    """Renderer interface for turning arbitrary values into text."""

    @abstractmethod
    def render(self, value: Any) -> str:
        raise NotImplementedError

    @abstractmethod
    def fallback(self, value: Any) -> str:
        raise NotImplementedError
