"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from declareviz.graph.builder import assemble_elements, build_element_graph
from declareviz.layout.config import LayoutConfig
from declareviz.schema.loader import parse_model_from_string


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def minimal_model_yaml() -> str:
    """Return a minimal valid model: two activities, one init."""
    return """
activities: [A, B]
unary:
  - constraint: init
    activity: A
"""


@pytest.fixture
def process_model_yaml() -> str:
    """Return a model with several constraint kinds."""
    return """
activities: [A, B, C, D]
constraints:
  - constraint: succession
    source: A
    target: B
  - constraint: response
    source: B
    target: C
  - constraint: chain precedence
    source: C
    target: D
  - constraint: response
    source: A
    target: B
unary:
  - constraint: init
    activity: A
"""


@pytest.fixture
def minimal_model(minimal_model_yaml):
    """Return a parsed minimal model."""
    return parse_model_from_string(minimal_model_yaml)


@pytest.fixture
def process_model(process_model_yaml):
    """Return a parsed process model."""
    return parse_model_from_string(process_model_yaml)


@pytest.fixture
def process_elements(process_model):
    """Return the element set assembled from the process model."""
    return assemble_elements(process_model)


@pytest.fixture
def process_graph(process_model):
    """Return the element graph built from the process model."""
    return build_element_graph(process_model)


@pytest.fixture
def fast_config() -> LayoutConfig:
    """Return a layout config with a small, iteration-bound budget."""
    return LayoutConfig(max_iterations=50, max_simulation_time=5.0)
