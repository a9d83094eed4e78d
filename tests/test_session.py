"""Tests for VisualizationSession."""

import json
import logging

import pytest

from declareviz.graph.elements import ANCHOR_POSITION
from declareviz.layout.engine import LayoutResult
from declareviz.render.errors import SessionError
from declareviz.session import SessionState, VisualizationSession

MODEL = {
    "activities": ["A", "B"],
    "constraints": [{"constraint": "response", "source": "A", "target": "B"}],
    "unary": [{"constraint": "init", "activity": "A"}],
}

OTHER_MODEL = {
    "activities": ["X", "Y", "Z"],
    "constraints": [{"constraint": "succession", "source": "X", "target": "Y"}],
}


class CountingEngine:
    """Engine that counts runs and puts every node at the origin."""

    def __init__(self):
        self.runs = 0

    def run(self, elements, edge_length, options, on_tick=None):
        self.runs += 1
        positions = {node.id: node.position or ANCHOR_POSITION for node in elements.nodes}
        return LayoutResult(positions=positions, converged=True)


class FailingEngine:
    def run(self, elements, edge_length, options, on_tick=None):
        raise RuntimeError("engine exploded")


@pytest.fixture
def session(fast_config):
    with VisualizationSession(config=fast_config) as session:
        yield session


class TestLifecycle:
    def test_starts_uninitialized(self):
        session = VisualizationSession()

        assert session.state == SessionState.UNINITIALIZED
        assert session.surface is None
        assert session.model is None

    def test_render(self, session):
        surface = session.render(MODEL)

        assert session.state == SessionState.RENDERED
        assert session.surface is surface
        assert session.model.activities == ["A", "B"]
        assert surface.position("A") == ANCHOR_POSITION
        assert surface.position("init-A") == surface.position("A")

    def test_accepts_model_instance(self, session, minimal_model):
        surface = session.render(minimal_model)

        assert surface is not None
        assert session.model == minimal_model

    def test_new_model_replaces_surface(self, session):
        first = session.render(MODEL)
        second = session.render(OTHER_MODEL)

        assert first.destroyed is True
        assert second.destroyed is False
        assert session.surface is second
        assert session.state == SessionState.RENDERED
        with pytest.raises(SessionError):
            first.to_elements()

    def test_same_model_is_a_no_op(self, fast_config):
        engine = CountingEngine()
        session = VisualizationSession(config=fast_config, engine=engine)

        first = session.render(MODEL)
        second = session.render(json.loads(json.dumps(MODEL)))

        assert second is first
        assert engine.runs == 1
        assert first.destroyed is False

    def test_close(self, session):
        surface = session.render(MODEL)
        session.close()

        assert surface.destroyed is True
        assert session.surface is None
        assert session.state == SessionState.DESTROYED

    def test_close_without_render(self):
        session = VisualizationSession()
        session.close()

        assert session.state == SessionState.UNINITIALIZED

    def test_context_manager_destroys_surface(self, fast_config):
        with VisualizationSession(config=fast_config) as session:
            surface = session.render(MODEL)

        assert surface.destroyed is True

    def test_render_after_close(self, session):
        session.render(MODEL)
        session.close()

        assert session.render(MODEL) is not None
        assert session.state == SessionState.RENDERED


class TestMalformedInput:
    def test_malformed_returns_none(self, session, caplog):
        with caplog.at_level(logging.WARNING, logger="declareviz.session"):
            assert session.render({"constraints": []}) is None

        assert session.state == SessionState.UNINITIALIZED
        assert "malformed" in caplog.text

    def test_malformed_tears_down_previous(self, session):
        surface = session.render(MODEL)

        assert session.render({"activities": "not a list"}) is None
        assert surface.destroyed is True
        assert session.surface is None
        assert session.state == SessionState.DESTROYED

    def test_non_mapping(self, session):
        assert session.render(["A", "B"]) is None

    def test_engine_failure_still_renders(self, fast_config, caplog):
        session = VisualizationSession(config=fast_config, engine=FailingEngine())

        with caplog.at_level(logging.WARNING, logger="declareviz.layout.orchestrator"):
            surface = session.render(MODEL)

        assert surface is not None
        assert session.state == SessionState.RENDERED
        assert surface.layout.converged is False
        assert surface.position("A") == ANCHOR_POSITION
        assert surface.position("init-A") == surface.position("A")
        assert "engine exploded" in caplog.text


class TestExport:
    def test_export_before_render(self, session, tmp_path):
        with pytest.raises(SessionError):
            session.export_json()
        with pytest.raises(SessionError):
            session.export_png(tmp_path / "graph.png")

    def test_export_json(self, session, tmp_path):
        session.render(MODEL)
        path = tmp_path / "declareModel.json"

        text = session.export_json(path)

        assert json.loads(text) == MODEL
        assert json.loads(path.read_text()) == MODEL

    def test_export_png(self, session, tmp_path):
        session.render(MODEL)
        path = tmp_path / "graph.png"

        data = session.export_png(path)

        assert data.startswith(b"\x89PNG")
        assert path.read_bytes().startswith(b"\x89PNG")

    def test_export_after_close(self, session):
        session.render(MODEL)
        session.close()

        with pytest.raises(SessionError):
            session.export_png()
