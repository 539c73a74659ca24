from typing import Optional

from errnote.caller.interface import CallerResolver


class StaticCallerResolver(CallerResolver):
    """Resolver that always reports the same name, for tests and demos."""

    def __init__(self, name: Optional[str]) -> None:
        self.name = name

    def resolve(self, depth: int = 1) -> Optional[str]:
        return self.name
