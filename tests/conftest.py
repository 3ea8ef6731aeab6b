"""Shared fixtures; also lets the tests run from a plain checkout."""

from __future__ import annotations

import io
import locale
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parent.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chd.config import DumpConfig  # noqa: E402
from chd.dump import dump  # noqa: E402
from chd.source import InputSet  # noqa: E402


@pytest.fixture
def utf8_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the locale encoding seen by the CLI to UTF-8."""

    monkeypatch.setattr(locale, "getpreferredencoding", lambda do_setlocale=True: "UTF-8")


@pytest.fixture
def render_dump() -> Callable[..., str]:
    """Return a helper that dumps ``data`` read from stdin and returns the text."""

    def _render(data: bytes, **options) -> str:
        options.setdefault("encoding", "utf-8")
        config = DumpConfig(**options)
        out = io.BytesIO()
        dump(config, InputSet(["-"], stdin=io.BytesIO(data)), out)
        return out.getvalue().decode(config.encoding)

    return _render
