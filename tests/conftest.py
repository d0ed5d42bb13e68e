"""Pytest configuration and fixtures for the trace generator tests."""

import pytest

from config import AppConfig
from graph import Graph
from main import create_app


@pytest.fixture
def sample_graph():
    """The seven-vertex demo graph, start vertex 0."""
    return Graph.sample()


@pytest.fixture
def chain_graph():
    """0 → 1 → 2 plus an isolated vertex 3."""
    g = Graph()
    for _ in range(4):
        g.add_vertex()
    g.add_edge(0, 1, 4)
    g.add_edge(1, 2, 6)
    return g


@pytest.fixture
def app():
    cfg = AppConfig(secret_key="test-secret", testing=True, log_level="DEBUG")
    return create_app(cfg)


@pytest.fixture
def client(app):
    return app.test_client()
