import pytest

from errnote.annotator.service import Annotator
from errnote.caller.impl_static import StaticCallerResolver
from errnote.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Each test reads the environment from scratch."""
    monkeypatch.delenv("ERRNOTE_QUALIFIED_NAMES", raising=False)
    monkeypatch.delenv("ERRNOTE_ENV_FILE", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def annotator() -> Annotator:
    return Annotator(caller=StaticCallerResolver("pkg.Save"))
