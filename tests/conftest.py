"""Pytest fixtures and configuration."""

import logging
import random

import pytest

from cnid_synth.config.dataset_loader import load_dataset, parse_dataset
from cnid_synth.core.hierarchy import AdministrativeHierarchy
from cnid_synth.core.resolver import RegionResolver


SMALL_DATASET = {
    "provinces": [
        {"code": "110000", "name": "北京市"},
        {"code": "420000", "name": "湖北省"},
        {"code": "500000", "name": "重庆市"},
    ],
    "cities": [
        {"code": "110100", "name": "市辖区"},
        {"code": "420100", "name": "武汉市"},
        {"code": "420500", "name": "宜昌市"},
        {"code": "500100", "name": "市辖区"},
        {"code": "500200", "name": "县"},
    ],
    "districts": [
        {"code": "110101", "name": "东城区"},
        {"code": "110105", "name": "朝阳区"},
        {"code": "420101", "name": "市辖区"},
        {"code": "420102", "name": "江岸区"},
        {"code": "420106", "name": "武昌区"},
        {"code": "420502", "name": "西陵区"},
        {"code": "500103", "name": "渝中区"},
        {"code": "500229", "name": "城口县"},
    ],
    "towns": [
        {"code": "110101001", "name": "东华门街道"},
        {"code": "110101002", "name": "景山街道"},
        {"code": "420102002", "name": "大智街道"},
    ],
}


@pytest.fixture
def small_dataset():
    """Small in-memory dataset covering municipalities, placeholders and towns."""
    return parse_dataset(SMALL_DATASET)


@pytest.fixture
def small_hierarchy(small_dataset):
    """Hierarchy built from the small dataset."""
    return AdministrativeHierarchy.load(small_dataset)


@pytest.fixture
def small_resolver(small_hierarchy, rng):
    """Resolver over the small dataset with a seeded random source."""
    return RegionResolver(small_hierarchy, rng=rng)


@pytest.fixture(scope="session")
def bundled_dataset():
    """The dataset shipped with the package."""
    return load_dataset()


@pytest.fixture(scope="session")
def bundled_hierarchy(bundled_dataset):
    """Hierarchy built from the bundled dataset."""
    return AdministrativeHierarchy.load(bundled_dataset)


@pytest.fixture
def rng():
    """Seeded random source for reproducible tests."""
    return random.Random(20240307)


@pytest.fixture
def valid_id_cards():
    """Identity numbers with valid checksums."""
    return [
        "110101199003077715",  # Beijing Dongcheng, 1990-03-07, male
        "11010119900307109X",  # Beijing Dongcheng, X checksum
        "420102199001011244",  # Wuhan Jiang'an, 1990-01-01, female
    ]


@pytest.fixture
def invalid_id_cards():
    """Identity numbers that fail validation."""
    return [
        "110101199003077710",  # Invalid checksum
        "12345678901234567X",  # Invalid birth date
        "11010119900307",      # Too short
    ]


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
