from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from hquota.types import TableName

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "quotas"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def load_fixture() -> Any:
    def _load(name: str) -> dict[str, Any]:
        return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def orders_table() -> TableName:
    return TableName("ns", "orders")
