"""Pydantic models for Declare process models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BinaryConstraint(BaseModel):
    """A named relation between two activities."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(alias="constraint")
    source: str
    target: str


class UnaryConstraint(BaseModel):
    """A named property of a single activity, e.g. ``init``."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(alias="constraint")
    activity: str


class DeclareModel(BaseModel):
    """Root model: activities plus binary and unary constraints.

    Constraints may name activities that are not declared; those
    references are kept as-is and surface as dangling edges downstream.
    """

    activities: list[str]
    constraints: list[BinaryConstraint] = Field(default_factory=list)
    unary: list[UnaryConstraint] = Field(default_factory=list)

    @field_validator("activities", mode="after")
    @classmethod
    def drop_duplicate_activities(cls, activities: list[str]) -> list[str]:
        """Keep the first occurrence of each activity id, in order."""
        return list(dict.fromkeys(activities))

    def has_activity(self, activity: str) -> bool:
        """Check whether an activity id is declared."""
        return activity in self.activities

    def referenced_activities(self) -> list[str]:
        """Get every activity id referenced by a constraint, in order."""
        referenced: list[str] = []
        for constraint in self.constraints:
            referenced.extend([constraint.source, constraint.target])
        for unary in self.unary:
            referenced.append(unary.activity)
        return list(dict.fromkeys(referenced))

    def to_document(self) -> dict:
        """Serialize back to the input schema (``constraint`` keys)."""
        return self.model_dump(by_alias=True)
