"""Shared fixtures for swresolve tests."""

import os

import pytest

from swresolve.core.config import set_config
from swresolve.core.context import DictFlagContext
from swresolve.core.floats import FloatController


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Each test starts from default settings and a fresh float controller."""
    for key in list(os.environ):
        if key.startswith("SWRESOLVE_"):
            monkeypatch.delenv(key)
    set_config(None)
    FloatController.reset_instance()
    yield
    set_config(None)
    FloatController.reset_instance()


@pytest.fixture
def make_ctx():
    """Build a DictFlagContext from keyword-style flag values."""

    def _make(**values: str) -> DictFlagContext:
        return DictFlagContext({k.replace("_", "-"): v for k, v in values.items()})

    return _make
