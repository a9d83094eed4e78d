"""Force-directed layout engine.

The engine relaxes node positions under three forces: springs pulling each
connected pair toward its target edge length, inverse-distance repulsion
between every pair, and (optionally) a push-apart term for overlapping
node boxes. Every iteration moves each free node by at most the current
temperature, which cools geometrically. The run ends on convergence, on
the iteration cap or on the wall-clock budget; in every case the current
positions are returned.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

import networkx as nx
import numpy as np

from ..graph.elements import ANCHOR_POSITION, EdgeDescriptor, ElementSet, Point
from .errors import LayoutError

logger = logging.getLogger(__name__)

EdgeLength = Callable[[EdgeDescriptor], float]
TickCallback = Callable[[int, dict[str, Point]], None]

SPRING_STIFFNESS = 0.1
REPULSION_STRENGTH = 0.005
COOLING = 0.97
GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


@dataclass(frozen=True)
class LayoutOptions:
    """Simulation parameters handed to a layout engine."""

    avoid_overlap: bool = True
    animate: bool = False
    randomize: bool = False
    seed: int = 0
    max_simulation_time: float = 1.5
    max_iterations: int = 500
    node_spacing: float = 40.0
    node_width: float = 80.0
    node_height: float = 40.0
    convergence_tolerance: float = 0.5


@dataclass
class LayoutResult:
    """Positions produced by a layout run."""

    positions: dict[str, Point] = field(default_factory=dict)
    converged: bool = False
    iterations: int = 0
    elapsed: float = 0.0


class LayoutEngine(Protocol):
    """Anything that can position an element set."""

    def run(
        self,
        elements: ElementSet,
        edge_length: EdgeLength,
        options: LayoutOptions,
        on_tick: TickCallback | None = None,
    ) -> LayoutResult:
        ...


@dataclass(frozen=True)
class _Springs:
    sources: np.ndarray
    targets: np.ndarray
    lengths: np.ndarray


class ForceDirectedEngine:
    """Default engine: bounded force-directed relaxation on numpy arrays."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock

    def run(
        self,
        elements: ElementSet,
        edge_length: EdgeLength,
        options: LayoutOptions,
        on_tick: TickCallback | None = None,
    ) -> LayoutResult:
        """Lay out the nodes of an element set.

        Locked nodes keep their position and still push and pull the
        free ones. Edges naming an unknown node are ignored.

        Args:
            elements: The nodes and edges to lay out.
            edge_length: Target length for each edge.
            options: Simulation parameters.
            on_tick: Called with the iteration number and positions after
                every step when ``options.animate`` is set.

        Returns:
            A LayoutResult covering every node in ``elements``.

        Raises:
            LayoutError: If the budget or iteration cap is negative.
        """
        if options.max_simulation_time < 0 or options.max_iterations < 0:
            raise LayoutError("Layout budget must not be negative")

        start = self._clock()
        ids = [node.id for node in elements.nodes]
        if not ids:
            return LayoutResult(converged=True)

        index = {node_id: i for i, node_id in enumerate(ids)}
        movable = np.array([not node.locked for node in elements.nodes])
        springs = self._build_springs(elements, index, edge_length)
        ideal = float(springs.lengths.mean()) if len(springs.lengths) else 0.0
        min_separation = (
            math.hypot(options.node_width, options.node_height) + options.node_spacing
        )
        ideal = max(ideal, min_separation)

        pos = self._seed_positions(elements, movable, ideal, options)

        if not movable.any():
            return LayoutResult(
                positions=_to_points(ids, pos),
                converged=True,
                elapsed=self._clock() - start,
            )

        jitter = _jitter_directions(len(ids))
        tolerance = options.convergence_tolerance
        temperature = ideal / 2.0
        converged = False
        iterations = 0

        for iteration in range(options.max_iterations):
            if self._clock() - start >= options.max_simulation_time:
                break

            step = self._step(
                pos, springs, movable, jitter, ideal, min_separation, temperature, options
            )
            candidate = pos + step
            if not np.isfinite(candidate).all():
                logger.warning("Layout produced non-finite positions, stopping early")
                break

            pos = candidate
            iterations = iteration + 1
            temperature = max(temperature * COOLING, 2.0 * tolerance)

            if options.animate and on_tick is not None:
                on_tick(iterations, _to_points(ids, pos))

            if np.linalg.norm(step, axis=1).max() < tolerance:
                converged = True
                break

        elapsed = self._clock() - start
        logger.debug(
            "Layout of %d nodes: %d iterations in %.3fs (converged=%s)",
            len(ids),
            iterations,
            elapsed,
            converged,
        )
        return LayoutResult(
            positions=_to_points(ids, pos),
            converged=converged,
            iterations=iterations,
            elapsed=elapsed,
        )

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def _build_springs(
        self, elements: ElementSet, index: dict[str, int], edge_length: EdgeLength
    ) -> _Springs:
        """Collapse edges into one spring per node pair, keeping the longest."""
        pairs: dict[tuple[int, int], float] = {}
        for edge in elements.edges:
            i = index.get(edge.source)
            j = index.get(edge.target)
            if i is None or j is None or i == j:
                continue
            key = (min(i, j), max(i, j))
            pairs[key] = max(pairs.get(key, 0.0), float(edge_length(edge)))

        if not pairs:
            empty = np.zeros(0, dtype=int)
            return _Springs(empty, empty, np.zeros(0))

        keys = list(pairs)
        return _Springs(
            sources=np.array([i for i, _ in keys]),
            targets=np.array([j for _, j in keys]),
            lengths=np.array([pairs[key] for key in keys]),
        )

    def _seed_positions(
        self,
        elements: ElementSet,
        movable: np.ndarray,
        ideal: float,
        options: LayoutOptions,
    ) -> np.ndarray:
        """Place locked nodes at their position and free nodes on a circle.

        Free nodes go round the circle in insertion order, so the same
        element set always starts from the same layout. With
        ``randomize`` they are scattered with a seeded generator instead.
        """
        pos = np.zeros((len(elements.nodes), 2))
        free = [i for i, node in enumerate(elements.nodes) if movable[i]]
        for i, node in enumerate(elements.nodes):
            if not movable[i]:
                anchor = node.position or ANCHOR_POSITION
                pos[i] = (anchor.x, anchor.y)

        if not free:
            return pos

        radius = max(ideal, ideal * len(free) / (2.0 * math.pi))
        if options.randomize:
            rng = np.random.default_rng(options.seed)
            pos[free] = rng.uniform(-radius, radius, size=(len(free), 2))
        elif len(free) == 1:
            pos[free[0]] = (radius, 0.0)
        else:
            circle = nx.circular_layout(free, scale=radius)
            for i in free:
                pos[i] = circle[i]
        return pos

    # -------------------------------------------------------------------------
    # Relaxation
    # -------------------------------------------------------------------------

    def _step(
        self,
        pos: np.ndarray,
        springs: _Springs,
        movable: np.ndarray,
        jitter: np.ndarray,
        ideal: float,
        min_separation: float,
        temperature: float,
        options: LayoutOptions,
    ) -> np.ndarray:
        """Compute one capped displacement for every node."""
        delta = pos[:, None, :] - pos[None, :, :]
        dist = np.linalg.norm(delta, axis=-1)

        # Nudge coincident pairs apart along a fixed direction
        coincident = dist < 1e-6
        np.fill_diagonal(coincident, False)
        if coincident.any():
            delta = np.where(coincident[..., None], jitter * 1e-3, delta)
            dist = np.where(coincident, 1e-3, dist)
        np.fill_diagonal(dist, np.inf)

        unit = delta / dist[..., None]
        disp = ((REPULSION_STRENGTH * ideal**2 / dist)[..., None] * unit).sum(axis=1)

        if options.avoid_overlap:
            overlap = np.clip(min_separation - dist, 0.0, None)
            disp += (0.5 * overlap[..., None] * unit).sum(axis=1)

        if len(springs.lengths):
            d_vec = pos[springs.targets] - pos[springs.sources]
            d = np.maximum(np.linalg.norm(d_vec, axis=1), 1e-6)
            pull = (SPRING_STIFFNESS * (d - springs.lengths) / d)[:, None] * d_vec
            np.add.at(disp, springs.sources, pull)
            np.add.at(disp, springs.targets, -pull)

        disp[~movable] = 0.0
        norms = np.linalg.norm(disp, axis=1)
        scale = np.minimum(1.0, temperature / np.maximum(norms, 1e-12))
        return disp * scale[:, None]


def seed_layout(elements: ElementSet, spacing: float) -> dict[str, Point]:
    """Deterministic starting layout without any relaxation.

    Locked nodes sit at their fixed position; free nodes go round a
    circle in insertion order, spaced about ``spacing`` apart.

    Args:
        elements: The nodes to place.
        spacing: Target distance between neighbouring free nodes.

    Returns:
        A position for every node in ``elements``.
    """
    positions: dict[str, Point] = {}
    free = []
    for node in elements.nodes:
        if node.locked:
            positions[node.id] = node.position or ANCHOR_POSITION
        else:
            free.append(node.id)

    radius = max(spacing, spacing * len(free) / (2.0 * math.pi))
    if len(free) == 1:
        positions[free[0]] = Point(radius, 0.0)
    elif free:
        circle = nx.circular_layout(free, scale=radius)
        for node_id in free:
            x, y = circle[node_id]
            positions[node_id] = Point(float(x), float(y))
    return positions


def _jitter_directions(n: int) -> np.ndarray:
    """Antisymmetric unit directions used to split coincident nodes."""
    i, j = np.meshgrid(np.arange(n), np.arange(n), indexing="ij")
    theta = GOLDEN_ANGLE * (np.minimum(i, j) * n + np.maximum(i, j))
    sign = np.where(i < j, 1.0, -1.0)
    return np.stack([np.cos(theta), np.sin(theta)], axis=-1) * sign[..., None]


def _to_points(ids: list[str], pos: np.ndarray) -> dict[str, Point]:
    return {node_id: Point(float(x), float(y)) for node_id, (x, y) in zip(ids, pos)}
