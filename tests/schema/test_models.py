"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from declareviz.schema.models import BinaryConstraint, DeclareModel, UnaryConstraint


class TestBinaryConstraint:
    def test_reads_constraint_key(self):
        constraint = BinaryConstraint.model_validate(
            {"constraint": "response", "source": "A", "target": "B"}
        )

        assert constraint.kind == "response"
        assert constraint.source == "A"
        assert constraint.target == "B"

    def test_accepts_field_name(self):
        constraint = BinaryConstraint(kind="response", source="A", target="B")
        assert constraint.kind == "response"

    def test_missing_target(self):
        with pytest.raises(ValidationError):
            BinaryConstraint.model_validate({"constraint": "response", "source": "A"})


class TestUnaryConstraint:
    def test_reads_constraint_key(self):
        unary = UnaryConstraint.model_validate({"constraint": "init", "activity": "A"})

        assert unary.kind == "init"
        assert unary.activity == "A"


class TestDeclareModel:
    def test_defaults(self):
        model = DeclareModel.model_validate({"activities": ["A"]})

        assert model.activities == ["A"]
        assert model.constraints == []
        assert model.unary == []

    def test_activities_required(self):
        with pytest.raises(ValidationError):
            DeclareModel.model_validate({"constraints": []})

    def test_activities_must_be_a_list(self):
        with pytest.raises(ValidationError):
            DeclareModel.model_validate({"activities": "A"})

    def test_duplicate_activities_dropped_in_order(self):
        model = DeclareModel.model_validate({"activities": ["B", "A", "B", "C", "A"]})
        assert model.activities == ["B", "A", "C"]

    def test_dangling_references_are_accepted(self):
        model = DeclareModel.model_validate(
            {
                "activities": ["A"],
                "constraints": [{"constraint": "response", "source": "A", "target": "X"}],
            }
        )

        assert not model.has_activity("X")
        assert model.referenced_activities() == ["A", "X"]

    def test_to_document_uses_input_keys(self):
        data = {
            "activities": ["A", "B"],
            "constraints": [{"constraint": "response", "source": "A", "target": "B"}],
            "unary": [{"constraint": "init", "activity": "A"}],
        }
        model = DeclareModel.model_validate(data)

        assert model.to_document() == data
