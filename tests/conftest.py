from pathlib import Path

import pytest

from leaf.compiler import FileSystemLoader
from leaf.stem import Stem

RESOURCES = Path(__file__).parent / "resources"


@pytest.fixture
def resources() -> Path:
    return RESOURCES


@pytest.fixture
def stem() -> Stem:
    return Stem(FileSystemLoader(RESOURCES))
