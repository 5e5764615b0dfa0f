import copy
import json
import os
import sys
from pathlib import Path

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from iconjson.collection import IconSet  # noqa: E402
from iconjson.svg import IdSequence  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

FA_ICONS = [
    "arrow-circle-left",
    "arrow-circle-up",
    "arrow-up",
    "arrow-left",
    "arrows",
    "arrows-alt",
    "arrows-h",
    "arrows-v",
    "assistive-listening-systems",
    "asterisk",
    "at",
    "audio-description",
]
FA_ALIASES = ["arrow-circle-right", "arrow-down", "arrow-right"]


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def _fa_json() -> dict:
    return json.loads((FIXTURES_DIR / "fa.json").read_text(encoding="utf-8"))


@pytest.fixture()
def fa_data(_fa_json) -> dict:
    """Fresh copy of the FontAwesome subset, safe to mutate."""
    return copy.deepcopy(_fa_json)


@pytest.fixture()
def fa_set(fa_data) -> IconSet:
    return IconSet.from_data(fa_data)


@pytest.fixture()
def ids() -> IdSequence:
    return IdSequence(prefix_factory=lambda: "test-id-")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ICONJSON_COLLECTIONS_DIR", "ICONJSON_ID_PREFIX", "ICONJSON_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
