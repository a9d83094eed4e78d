"""Layout orchestration: edge-length policy, spacing and decorator pinning."""

import logging
from dataclasses import replace

from ..graph.constraint_map import ConstraintKind
from ..graph.elements import EdgeDescriptor, ElementSet, Point
from .config import LayoutConfig
from .engine import (
    ForceDirectedEngine,
    LayoutEngine,
    LayoutOptions,
    LayoutResult,
    TickCallback,
    seed_layout,
)

logger = logging.getLogger(__name__)


class LayoutOrchestrator:
    """Runs a layout engine over an element set.

    Decorator nodes and edges never reach the engine. Once the engine
    returns, each decorator is placed exactly on its anchor activity.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        engine: LayoutEngine | None = None,
    ):
        self.config = config or LayoutConfig()
        self.engine = engine or ForceDirectedEngine()

    def edge_length(self, edge: EdgeDescriptor) -> float:
        """Target length of an edge; succession edges are kept longer."""
        if edge.constraint == ConstraintKind.SUCCESSION.value:
            return self.config.succession_edge_length
        return self.config.edge_length

    def node_spacing(self, elements: ElementSet) -> float:
        """Spacing between node boxes, wider for dense models."""
        if elements.constraint_count > self.config.density_threshold:
            return self.config.dense_node_spacing
        return self.config.node_spacing

    def options_for(self, elements: ElementSet) -> LayoutOptions:
        """Build engine options for an element set."""
        config = self.config
        return LayoutOptions(
            avoid_overlap=config.avoid_overlap,
            animate=config.animate,
            randomize=config.randomize,
            seed=config.seed,
            max_simulation_time=config.max_simulation_time,
            max_iterations=config.max_iterations,
            node_spacing=self.node_spacing(elements),
            node_width=config.node_width,
            node_height=config.node_height,
            convergence_tolerance=config.convergence_tolerance,
        )

    def layout(
        self, elements: ElementSet, on_tick: TickCallback | None = None
    ) -> LayoutResult:
        """Position every node of an element set.

        Args:
            elements: The assembled elements.
            on_tick: Forwarded to the engine for animated runs.

        Returns:
            A LayoutResult with positions for all nodes, decorators included.
        """
        core = elements.without_decorators()
        try:
            result = self.engine.run(
                core,
                self.edge_length,
                self.options_for(elements),
                on_tick,
            )
        except Exception as e:
            logger.warning("Layout engine failed, using seed layout: %s", e)
            result = LayoutResult(
                positions=seed_layout(core, self.config.edge_length),
                converged=False,
            )
        if not result.converged:
            logger.info(
                "Layout stopped after %d iterations without converging",
                result.iterations,
            )
        return replace(
            result, positions=repin_decorators(elements, result.positions)
        )


def repin_decorators(
    elements: ElementSet, positions: dict[str, Point]
) -> dict[str, Point]:
    """Place every decorator node on its anchor's final position.

    A decorator whose anchor has no position keeps its own fixed
    position.

    Returns:
        A new position mapping including the decorator nodes.
    """
    pinned = dict(positions)
    for node in elements.iter_decorators():
        anchor_position = positions.get(node.anchor) if node.anchor else None
        if anchor_position is not None:
            pinned[node.id] = anchor_position
        elif node.position is not None:
            pinned[node.id] = node.position
    return pinned
