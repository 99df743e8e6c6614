"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from core.models import Product
from tests.helpers import make_product


@pytest.fixture
def products() -> list[Product]:
    return [make_product("Notion"), make_product("Otter"), make_product("Raycast")]
