import random
from pathlib import Path

import pytest

from ppfactor.config import get_settings
from ppfactor.services.factor_table import FileSystemTableLocator

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def table_locator():
    return FileSystemTableLocator(DATA_DIR)


@pytest.fixture
def rng():
    return random.Random(20240101)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
