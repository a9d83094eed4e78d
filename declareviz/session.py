"""Visualization session: one live rendering per model value."""

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from .graph.builder import assemble_elements
from .graph.element_graph import ElementGraph
from .layout.config import LayoutConfig
from .layout.engine import LayoutEngine
from .layout.orchestrator import LayoutOrchestrator
from .output.export import export_model_json, write_model_json, write_png
from .render.errors import SessionError
from .render.styles import StyleRegistry
from .render.surface import RenderSurface
from .schema.errors import SchemaValidationError
from .schema.loader import validate_model
from .schema.models import DeclareModel

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of a session."""

    UNINITIALIZED = "uninitialized"
    BUILDING = "building"
    RENDERED = "rendered"
    DESTROYED = "destroyed"


class VisualizationSession:
    """Owns the rendering of one model value at a time.

    Each new model value tears down the current surface before the next
    one is built, so at most one surface is alive. Malformed models are
    logged and ignored rather than raised to the caller.

    Example:
        with VisualizationSession() as session:
            surface = session.render(data)
            session.export_png("graph.png")
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        engine: LayoutEngine | None = None,
        styles: StyleRegistry | None = None,
    ):
        self._orchestrator = LayoutOrchestrator(config, engine)
        self._styles = styles or StyleRegistry()
        self._state = SessionState.UNINITIALIZED
        self._model: DeclareModel | None = None
        self._surface: RenderSurface | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def model(self) -> DeclareModel | None:
        """The model of the live surface, if any."""
        return self._model

    @property
    def surface(self) -> RenderSurface | None:
        """The live surface, if any."""
        return self._surface

    def render(self, data: DeclareModel | dict[str, Any]) -> RenderSurface | None:
        """Render a model, replacing any previous rendering.

        Args:
            data: A validated model or a raw mapping in the input schema.

        Returns:
            The new surface, the current one when ``data`` equals the
            rendered model, or None when ``data`` is malformed.
        """
        if self._state == SessionState.RENDERED and self._is_current(data):
            return self._surface

        self._teardown()

        try:
            model = validate_model(data)
        except SchemaValidationError as e:
            logger.warning("Not rendering malformed model: %s", e)
            for err in e.errors:
                logger.debug("  - %s: %s", err["loc"], err["msg"])
            return None

        self._transition(SessionState.BUILDING)
        try:
            elements = assemble_elements(model)
            layout = self._orchestrator.layout(elements)
            surface = RenderSurface(
                ElementGraph.from_elements(elements), layout, self._styles
            )
        except Exception:
            # Nothing partial survives a failed build
            self._transition(SessionState.DESTROYED)
            raise

        self._model = model
        self._surface = surface
        self._transition(SessionState.RENDERED)
        return surface

    def close(self) -> None:
        """Destroy the live surface, if any."""
        self._teardown()

    def export_json(self, path: str | Path | None = None) -> str:
        """Export the rendered model as JSON, optionally writing it to a file.

        Raises:
            SessionError: If nothing is rendered.
        """
        if self._model is None:
            raise SessionError("No model has been rendered")
        if path is not None:
            write_model_json(self._model, path)
        return export_model_json(self._model)

    def export_png(self, path: str | Path | None = None, scale: float = 1.0) -> bytes:
        """Export the live surface as PNG, optionally writing it to a file.

        Raises:
            SessionError: If nothing is rendered.
        """
        if self._surface is None:
            raise SessionError("No surface has been rendered")
        if path is not None:
            write_png(self._surface, path, scale=scale)
        return self._surface.to_png(scale=scale)

    def __enter__(self) -> "VisualizationSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _is_current(self, data: DeclareModel | dict[str, Any]) -> bool:
        if isinstance(data, DeclareModel):
            return data == self._model
        try:
            return validate_model(data) == self._model
        except SchemaValidationError:
            return False

    def _teardown(self) -> None:
        if self._surface is None:
            return
        self._surface.destroy()
        self._surface = None
        self._model = None
        self._transition(SessionState.DESTROYED)

    def _transition(self, state: SessionState) -> None:
        logger.debug("Session %s -> %s", self._state.value, state.value)
        self._state = state
