from abc import ABC, abstractmethod
from typing import Optional


class CallerResolver(ABC):
    """Resolves the identity of a function further up the call stack."""

    @abstractmethod
    def resolve(self, depth: int = 1) -> Optional[str]:
        """Return the identity ``depth`` frames above the caller of ``resolve``, or None."""
        raise NotImplementedError
