"""declareviz: Declare process model visualization."""

from .graph.builder import assemble_elements
from .graph.constraint_map import map_constraint, normalize_kind
from .layout.orchestrator import LayoutOrchestrator
from .session import SessionState, VisualizationSession

__version__ = "0.1.0"

__all__ = [
    "assemble_elements",
    "map_constraint",
    "normalize_kind",
    "LayoutOrchestrator",
    "SessionState",
    "VisualizationSession",
]
