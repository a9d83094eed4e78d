"""Mapping of Declare constraint kinds to styled edge descriptors.

Each constraint expands into one or more edges between the same pair of
activities. Every edge carries class tags that the style registry turns
into line styles and end markers; overlaying several edges is how one
constraint gets e.g. a circle at the source and an arrow at the target.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .elements import EdgeDescriptor

_SEPARATORS = re.compile(r"[\s\-]+")


class ConstraintKind(str, Enum):
    """Binary constraint kinds with a defined visual notation."""

    SUCCESSION = "succession"
    PRECEDENCE = "precedence"
    RESPONSE = "response"
    NEG_PRECEDENCE = "neg_precedence"
    NEG_RESPONSE = "neg_response"
    NOT_COEXISTENCE = "not_coexistence"
    RESP_ABSENCE = "resp_absence"
    COEXISTENCE = "coexistence"
    CHAIN_SUCCESSION = "chain_succession"
    CHAIN_RESPONSE = "chain_response"
    CHAIN_PRECEDENCE = "chain_precedence"
    RESP_EXISTENCE = "resp_existence"
    CHOICE = "choice"


@dataclass(frozen=True)
class EdgeTemplate:
    """One edge of a constraint's expansion.

    ``suffix`` is appended to the edge id; None means the id is the bare
    prefix (only valid for single-edge kinds).
    """

    suffix: str | None
    classes: tuple[str, ...]


CONSTRAINT_TEMPLATES: dict[ConstraintKind, tuple[EdgeTemplate, ...]] = {
    ConstraintKind.SUCCESSION: (
        EdgeTemplate("main", ("succession-main",)),
        EdgeTemplate("sourcecircle", ("succession-source-circle",)),
        EdgeTemplate("targettriangle", ("succession-target-triangle",)),
        EdgeTemplate("targetcircle", ("succession-target-circle",)),
    ),
    ConstraintKind.PRECEDENCE: (
        EdgeTemplate("triangle", ("precedence-arrow",)),
        EdgeTemplate("circle", ("precedence-circle-offset",)),
    ),
    ConstraintKind.RESPONSE: (
        EdgeTemplate(None, ("line-single", "source-circle-target-triangle")),
    ),
    ConstraintKind.NEG_PRECEDENCE: (
        EdgeTemplate("circle", ("line-negative", "compound-arrow-circle")),
        EdgeTemplate("triangle", ("line-negative", "compound-arrow-triangle")),
    ),
    ConstraintKind.NEG_RESPONSE: (
        EdgeTemplate(None, ("line-negative", "source-circle-target-triangle")),
    ),
    ConstraintKind.NOT_COEXISTENCE: (
        EdgeTemplate(None, ("line-negative", "both-circle")),
    ),
    ConstraintKind.RESP_ABSENCE: (
        EdgeTemplate(None, ("line-negative", "source-circle")),
    ),
    ConstraintKind.COEXISTENCE: (
        EdgeTemplate(None, ("line-single", "both-circle")),
    ),
    ConstraintKind.CHAIN_SUCCESSION: (
        EdgeTemplate("1", ("line-triple-1",)),
        EdgeTemplate(
            "2-circle", ("line-triple-2", "source-circle", "compound-arrow-circle")
        ),
        EdgeTemplate("2-triangle", ("line-triple-2", "compound-arrow-triangle")),
        EdgeTemplate("3", ("line-triple-3",)),
    ),
    ConstraintKind.CHAIN_RESPONSE: (
        EdgeTemplate("1", ("line-triple-1",)),
        EdgeTemplate("2", ("line-triple-2", "source-circle-target-triangle")),
        EdgeTemplate("3", ("line-triple-3",)),
    ),
    ConstraintKind.CHAIN_PRECEDENCE: (
        EdgeTemplate("1", ("line-triple-1",)),
        EdgeTemplate("2-circle", ("line-triple-2", "compound-arrow-circle")),
        EdgeTemplate("2-triangle", ("line-triple-2", "compound-arrow-triangle")),
        EdgeTemplate("3", ("line-triple-3",)),
    ),
    ConstraintKind.RESP_EXISTENCE: (
        EdgeTemplate(None, ("line-single", "source-circle")),
    ),
    ConstraintKind.CHOICE: (
        EdgeTemplate(None, ("line-choice",)),
    ),
}

# Unrecognized kinds: a plain line labelled with the normalized kind
FALLBACK_TEMPLATES: tuple[EdgeTemplate, ...] = (EdgeTemplate(None, ("line-single",)),)


def normalize_kind(kind: str) -> str:
    """Normalize a constraint kind for lookup.

    Lower-cases the kind and collapses runs of whitespace and hyphens into
    a single underscore, so ``"Chain Response"``, ``"chain-response"`` and
    ``"chain_response"`` all map to the same kind. Leading and trailing
    separators are kept, so ``" succession"`` is not ``succession``.
    """
    return _SEPARATORS.sub("_", kind.lower())


def edge_id(
    source: str, target: str, kind: str, index: int, suffix: str | None = None
) -> str:
    """Build the id of one edge of a constraint's expansion."""
    prefix = f"{source}->{target}-{kind}-{index}"
    return f"{prefix}-{suffix}" if suffix else prefix


def lookup_kind(kind: str) -> ConstraintKind | None:
    """Get the known kind for a (raw) kind string, or None."""
    try:
        return ConstraintKind(normalize_kind(kind))
    except ValueError:
        return None


def is_known_kind(kind: str) -> bool:
    return lookup_kind(kind) is not None


def known_kinds() -> list[str]:
    return [kind.value for kind in ConstraintKind]


def map_constraint(
    kind: str, source: str, target: str, index: int
) -> list[EdgeDescriptor]:
    """Expand a binary constraint into its edge descriptors.

    Args:
        kind: The constraint kind, in any case or separator style.
        source: The source activity id.
        target: The target activity id.
        index: Position of the constraint in the model's constraint list.
            Two constraints between the same pair need distinct indexes.

    Returns:
        The edges for this constraint, in drawing order. Never empty.
    """
    normalized = normalize_kind(kind)
    known = lookup_kind(normalized)

    if known is None:
        templates = FALLBACK_TEMPLATES
        label = normalized
    else:
        templates = CONSTRAINT_TEMPLATES[known]
        label = None

    return [
        EdgeDescriptor(
            id=edge_id(source, target, normalized, index, template.suffix),
            source=source,
            target=target,
            classes=template.classes,
            label=label,
            constraint=normalized,
        )
        for template in templates
    ]
