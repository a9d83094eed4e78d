"""Layout layer: configuration, engine and orchestration."""

from .config import LayoutConfig, load_config
from .errors import LayoutError
from .engine import (
    ForceDirectedEngine,
    LayoutEngine,
    LayoutOptions,
    LayoutResult,
    seed_layout,
)
from .orchestrator import LayoutOrchestrator, repin_decorators

__all__ = [
    "LayoutConfig",
    "load_config",
    "LayoutError",
    "ForceDirectedEngine",
    "LayoutEngine",
    "LayoutOptions",
    "LayoutResult",
    "seed_layout",
    "LayoutOrchestrator",
    "repin_decorators",
]
