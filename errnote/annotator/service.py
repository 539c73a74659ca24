import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from errnote.annotator.context import is_context
from errnote.annotator.models import CTX_TOKEN, NIL_ERR, UNKNOWN_FN, Record, decode_record
from errnote.caller.impl_frame import FrameCallerResolver
from errnote.caller.interface import CallerResolver
from errnote.errors import AnnotatedError
from errnote.renderer.impl_json import JsonRenderer
from errnote.renderer.interface import Renderer

logger = logging.getLogger(__name__)


class Annotator:
    """Wraps errors with the calling function, a snapshot of arguments, and a message.

    The argument snapshot is fixed at construction; use ``with_args`` to get an
    annotator for a different call site instead of mutating a shared one.
    """

    def __init__(
        self,
        args: Sequence[Any] = (),
        caller: Optional[CallerResolver] = None,
        renderer: Optional[Renderer] = None,
        context_types: Iterable[type] = (),
    ) -> None:
        self._args: Tuple[Any, ...] = tuple(args)
        self.caller = caller or FrameCallerResolver()
        self.renderer = renderer or JsonRenderer()
        self.context_types: Tuple[type, ...] = tuple(context_types)

    @property
    def args(self) -> Tuple[Any, ...]:
        return self._args

    def with_args(self, *args: Any) -> "Annotator":
        """Return a new annotator with ``args`` as its snapshot and the same collaborators."""
        return Annotator(
            args=args,
            caller=self.caller,
            renderer=self.renderer,
            context_types=self.context_types,
        )

    def _render_args(self) -> Tuple[str, ...]:
        rendered: List[str] = []
        for value in self._args:
            if is_context(value, self.context_types):
                rendered.append(CTX_TOKEN)
                continue
            rendered.append(self.renderer.render(value))
        return tuple(rendered)

    def _inner(self, err: Any) -> Union[Record, str]:
        if err is None:
            return NIL_ERR
        if isinstance(err, AnnotatedError) and err.record is not None:
            return err.record
        try:
            err_str = str(err)
        except Exception as exc:
            logger.debug("str() failed for %s: %s", type(err).__name__, exc)
            err_str = self.renderer.fallback(err)
        previous = decode_record(err_str)
        if previous is None:
            return err_str
        return previous

    def annotate(self, err: Any, *msg: Any, stacklevel: int = 1) -> AnnotatedError:
        """Wrap ``err`` in a new error whose text is the rendered annotation record.

        ``stacklevel`` selects the function named in the record: 1 is the direct
        caller of ``annotate``, 2 is that function's caller, and so on.
        """
        if stacklevel < 1:
            raise ValueError(f"stacklevel must be >= 1, got {stacklevel}")

        fn_name = self.caller.resolve(depth=stacklevel)
        if fn_name is None:
            logger.debug("Could not resolve caller at stacklevel=%d", stacklevel)
            fn_name = UNKNOWN_FN

        record = Record(
            fn_name=fn_name,
            args=self._render_args(),
            msg=" ".join(str(part) for part in msg),
            inner=self._inner(err),
        )
        error = AnnotatedError(self.renderer.render(record), record)
        if isinstance(err, BaseException):
            error.__cause__ = err
        return error


def annotate(err: Any, *msg: Any, args: Sequence[Any] = (), stacklevel: int = 1) -> AnnotatedError:
    """One-shot annotation using the default collaborators."""
    return Annotator(args=args).annotate(err, *msg, stacklevel=stacklevel + 1)
