import pytest

from csv_importer.config import AppConfig
from csv_importer.mapping.catalog import MappingCatalog
from csv_importer.storage import UserRepository


@pytest.fixture
def catalog():
    return MappingCatalog()


@pytest.fixture
def full_mapping(catalog):
    return [catalog.by_name(n) for n in ["First", "Last", "Address", "ZIP", "Country"]]


@pytest.fixture
def config(tmp_path):
    return AppConfig(data_dir=tmp_path)


@pytest.fixture
def repository(config):
    return UserRepository(config)
