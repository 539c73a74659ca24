import inspect
import logging
from types import FrameType
from typing import Optional

from errnote.caller.interface import CallerResolver
from errnote.config import get_settings

logger = logging.getLogger(__name__)


def _frame_identity(frame: FrameType, qualified: bool) -> str:
    code = frame.f_code
    name = getattr(code, "co_qualname", code.co_name)
    if not qualified:
        return name
    module = frame.f_globals.get("__name__")
    return f"{module}.{name}" if module else name


class FrameCallerResolver(CallerResolver):
    """Resolver backed by interpreter frame introspection."""

    def __init__(self, qualified: Optional[bool] = None) -> None:
        self._qualified = qualified

    @property
    def qualified(self) -> bool:
        if self._qualified is None:
            return get_settings().qualified_names
        return self._qualified

    def resolve(self, depth: int = 1) -> Optional[str]:
        frame = inspect.currentframe()
        if frame is None:
            logger.debug("Frame introspection unavailable on this interpreter")
            return None
        try:
            # One extra hop to step out of resolve() itself.
            for _ in range(depth + 1):
                frame = frame.f_back
                if frame is None:
                    logger.debug("Call stack shallower than depth=%d", depth)
                    return None
            return _frame_identity(frame, self.qualified)
        finally:
            del frame
