"""
Shared fixtures for the conceptgraph test suite.

Tests are marked ``unit``, ``integration`` or ``behavioral`` after the
directory they live in, so ``pytest -m unit`` runs the fast suite only.
Markers are registered in pyproject.toml.
"""

import pytest

from conceptgraph import AssociationStore, ConceptProcessor, EngineConfig


_DIRECTORY_MARKERS = {
    'unit': pytest.mark.unit,
    'integration': pytest.mark.integration,
    'behavioral': pytest.mark.behavioral,
}


def pytest_collection_modifyitems(config, items):
    for item in items:
        marker = _DIRECTORY_MARKERS.get(item.path.parent.name)
        if marker is not None:
            item.add_marker(marker)


@pytest.fixture
def store():
    return AssociationStore()


@pytest.fixture
def chain_store():
    """alpha - beta - gamma - delta, all at 0.9."""
    chain = AssociationStore()
    chain.add_edge("alpha", "beta", 0.9)
    chain.add_edge("beta", "gamma", 0.9)
    chain.add_edge("gamma", "delta", 0.9)
    return chain


@pytest.fixture
def fresh_processor():
    """Empty store, default profiles and default configuration."""
    return ConceptProcessor()


@pytest.fixture
def permissive_processor():
    """Processor that never drops a profile branch at merge time."""
    return ConceptProcessor(config=EngineConfig(merge_threshold=0.0))
