"""Shared fixtures for the rquery test suite."""

from pathlib import Path

import pytest

from rquery import Document

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_path() -> Path:
    """Path of the sample document used across test modules."""
    return FIXTURES_DIR / "sample.xml"


@pytest.fixture
def sample_document(sample_path: Path) -> Document:
    """The sample document, freshly parsed."""
    return Document.from_file(sample_path)
