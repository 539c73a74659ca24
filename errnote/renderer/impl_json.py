import logging
from typing import Any

from pydantic_core import to_json

from errnote.annotator.models import Record, encode_record
from errnote.renderer.interface import Renderer

logger = logging.getLogger(__name__)


class JsonRenderer(Renderer):
    """Renders values as compact JSON, falling back to their repr."""

    def render(self, value: Any) -> str:
        try:
            if isinstance(value, Record):
                return encode_record(value)
            return to_json(value).decode("utf-8")
        except (ValueError, TypeError, RecursionError, UnicodeDecodeError) as exc:
            # to_json raises PydanticSerializationError (a ValueError) for unknown
            # types and ValueError for circular references.
            logger.debug("JSON render failed for %s, using fallback: %s", type(value).__name__, exc)
            return self.fallback(value)

    def fallback(self, value: Any) -> str:
        try:
            text = repr(value)
        except Exception as exc:
            logger.debug("repr failed for %s: %s", type(value).__name__, exc)
            text = ""
        if not text:
            text = object.__repr__(value)
        return text


_default_renderer = JsonRenderer()


def render(value: Any) -> str:
    """Render ``value`` with the shared default renderer. Never raises."""
    return _default_renderer.render(value)
