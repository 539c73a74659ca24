import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import to_json

logger = logging.getLogger(__name__)

NIL_ERR = "nil err"
UNKNOWN_FN = "unknown"
CTX_TOKEN = "ctx"

_decoder = json.JSONDecoder()
_WHITESPACE = re.compile(r"[ \t\n\r]*")


class Record(BaseModel):
    """Context captured by one annotate call.

    ``inner`` is either the raw text of the wrapped error (``"nil err"`` when there was
    none) or the record of a previous annotation layer.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    fn_name: str
    args: Tuple[str, ...]
    msg: str
    inner: Union["Record", str]

    def layers(self) -> Iterator["Record"]:
        """Yield this record and every nested record, outermost first."""
        current: Union[Record, str] = self
        while isinstance(current, Record):
            yield current
            current = current.inner

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.layers())

    @property
    def root(self) -> str:
        """Text of the innermost wrapped error."""
        current: Union[Record, str] = self
        while isinstance(current, Record):
            current = current.inner
        return current


def _json(value: Any) -> str:
    return to_json(value).decode("utf-8")


def encode_record(record: Record) -> str:
    """Render a record chain as compact JSON, one layer at a time.

    Layers are written without recursion so chains of any depth encode.
    """
    parts: List[str] = []
    depth = 0
    for layer in record.layers():
        parts.append(
            f'{{"fn_name":{_json(layer.fn_name)},"args":{_json(layer.args)},'
            f'"msg":{_json(layer.msg)},"inner":'
        )
        depth += 1
    parts.append(_json(record.root))
    parts.append("}" * depth)
    return "".join(parts)


def _skip(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _parse_record(text: str) -> Record:
    # Objects nested under "inner" are pushed on a stack instead of recursing,
    # so there is no depth limit. All other values go through the json decoder.
    stack: List[Dict[str, Any]] = []
    pos = _skip(text, 0)
    state = "object"
    while True:
        if state == "object":
            if not text.startswith("{", pos):
                raise ValueError(f"expected an object at offset {pos}")
            stack.append({})
            pos = _skip(text, pos + 1)
            if text.startswith("}", pos):
                pos += 1
                state = "close"
            else:
                state = "member"
        elif state == "member":
            key, pos = _decoder.raw_decode(text, pos)
            fields = stack[-1]
            if not isinstance(key, str) or key in fields:
                raise ValueError(f"bad or duplicate key at offset {pos}")
            pos = _skip(text, pos)
            if not text.startswith(":", pos):
                raise ValueError(f"expected ':' at offset {pos}")
            pos = _skip(text, pos + 1)
            if key == "inner" and text.startswith("{", pos):
                state = "object"
                continue
            fields[key], pos = _decoder.raw_decode(text, pos)
            state = "next"
        elif state == "next":
            pos = _skip(text, pos)
            if text.startswith(",", pos):
                pos = _skip(text, pos + 1)
                state = "member"
            elif text.startswith("}", pos):
                pos += 1
                state = "close"
            else:
                raise ValueError(f"expected ',' or '}}' at offset {pos}")
        else:
            record = Record.model_validate(stack.pop())
            if not stack:
                if _skip(text, pos) != len(text):
                    raise ValueError(f"trailing data at offset {pos}")
                return record
            stack[-1]["inner"] = record
            state = "next"


def decode_record(text: str) -> Optional[Record]:
    """Parse rendered text back into a Record, or return None if it is not one."""
    try:
        return _parse_record(text)
    except (ValidationError, ValueError, RecursionError) as exc:
        logger.debug("Text is not an annotation record: %s", type(exc).__name__)
        return None
