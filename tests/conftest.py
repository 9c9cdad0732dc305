from __future__ import annotations

import pytest

import gecos


@pytest.fixture(autouse=True)
def fresh_library():
    """Restore the default settings and UI around every test"""
    gecos.initlib()
    yield
    gecos.initlib()


@pytest.fixture
def strict_mode():
    """Enable ``chfn`` validation library-wide"""
    gecos.initlib(strict=True)
