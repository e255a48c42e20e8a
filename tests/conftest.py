"""Shared pytest fixtures for cfgfile tests."""

from pathlib import Path

import pytest

from cfgfile.core import ir
from cfgfile.core.parser import parse

SAMPLE_KEYS = [
    "a",
    "sys",
    "ipnet",
    "name",
    "creds",
    "force",
    "c",
    "sentence",
    "sing",
    "quoted",
    "test id",
    "use bob's code",
    "blank",
]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_path(fixtures_dir: Path) -> Path:
    """Return path to the sample cfg file."""
    return fixtures_dir / "cfg" / "sample.cfg"


@pytest.fixture
def sample_text(sample_path: Path) -> str:
    """Return the sample cfg file's text."""
    return sample_path.read_text(encoding="utf-8")


@pytest.fixture
def sample_doc(sample_text: str) -> ir.Document:
    """Return the sample cfg file, parsed."""
    return parse(sample_text)


@pytest.fixture
def sample_keys() -> list[str]:
    """Primary keys of the sample file's records, in order."""
    return list(SAMPLE_KEYS)
