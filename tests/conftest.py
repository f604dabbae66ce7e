import pytest
from fastapi.testclient import TestClient

from dataspec.api.main import app
from dataspec.core.dataset import DatasetSpecification
from dataspec.core.observability.metrics import reset_metrics


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Make builder defaults deterministic regardless of the caller's shell
    monkeypatch.delenv("DATASPEC_STRICT_EMBEDDED_NAMES", raising=False)
    monkeypatch.delenv("DATASPEC_MAX_DOCUMENT_BYTES", raising=False)
    reset_metrics()


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def indexed_table():
    """
    Composite "indexed table": a data table and an index table under one root.
    """
    data = DatasetSpecification.builder("d", "table").property("ttl", "3600").build()
    index = DatasetSpecification.builder("i", "table").build()
    return (
        DatasetSpecification.builder("orders", "indexedTable")
        .property("columnsToIndex", "customer_id")
        .datasets(data, index)
        .build()
    )
