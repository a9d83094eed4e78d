"""Layout configuration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..schema.errors import SchemaValidationError
from ..schema.loader import flatten_errors, load_document


class LayoutConfig(BaseModel):
    """Tuning knobs for the layout orchestrator and default engine."""

    model_config = ConfigDict(extra="forbid")

    # Target edge lengths
    edge_length: float = Field(250.0, gt=0)
    succession_edge_length: float = Field(500.0, gt=0)

    # Engine options
    avoid_overlap: bool = True
    animate: bool = False
    randomize: bool = False
    seed: int = 0
    max_simulation_time: float = Field(1.5, ge=0)  # seconds
    max_iterations: int = Field(500, ge=0)
    convergence_tolerance: float = Field(0.5, gt=0)

    # Node spacing grows once the model has more constraints than this
    density_threshold: int = Field(7, ge=0)
    node_spacing: float = Field(40.0, ge=0)
    dense_node_spacing: float = Field(150.0, ge=0)

    node_width: float = Field(80.0, gt=0)
    node_height: float = Field(40.0, gt=0)


def load_config(path: str | Path) -> LayoutConfig:
    """Load a LayoutConfig from a YAML or JSON file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If a value is invalid or unknown.
    """
    data = load_document(path)
    try:
        return LayoutConfig.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(
            f"Invalid layout config with {e.error_count()} error(s)",
            flatten_errors(e),
        ) from e
