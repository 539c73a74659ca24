import asyncio
import concurrent.futures
import contextvars
import threading
from typing import Any, Iterable, Tuple

# Values that carry cancellation or request-scoped context. They are masked in
# annotation records instead of being rendered.
CONTEXT_TYPES: Tuple[type, ...] = (
    contextvars.Context,
    asyncio.Future,
    asyncio.Event,
    threading.Event,
    concurrent.futures.Future,
)


def is_context(value: Any, extra_types: Iterable[type] = ()) -> bool:
    """Return True if ``value`` is a context/cancellation carrier."""
    return isinstance(value, CONTEXT_TYPES + tuple(extra_types))
