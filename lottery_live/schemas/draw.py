"""Schemas for the per-lottery draw shapes.

A guess uses the same shape as the draw it is scored against.
"""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


def _require_unique(values: list[int] | None, field_name: str) -> None:
    if values is not None and len(values) != len(set(values)):
        raise ValidationError({field_name: ["Numbers must be unique"]})


class EuroJackpotDrawSchema(Schema):
    """5 numbers from 1..50 plus 2 stars from 1..12."""

    type = fields.String(required=True, validate=validate.Equal("eurojackpot"))

    numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1, max=50)),
        required=True,
        validate=validate.Length(equal=5),
    )

    stars = fields.List(
        fields.Integer(validate=validate.Range(min=1, max=12)),
        required=True,
        validate=validate.Length(equal=2),
    )

    @validates_schema
    def _validate_unique(self, data, **kwargs):  # type: ignore[no-untyped-def]
        _require_unique(data.get("numbers"), "numbers")
        _require_unique(data.get("stars"), "stars")


class PowerballDrawSchema(Schema):
    """5 white balls from 1..69 plus the powerball from 1..26."""

    type = fields.String(required=True, validate=validate.Equal("powerball"))

    numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1, max=69)),
        required=True,
        validate=validate.Length(equal=5),
    )

    powerball = fields.Integer(required=True, validate=validate.Range(min=1, max=26))

    @validates_schema
    def _validate_unique(self, data, **kwargs):  # type: ignore[no-untyped-def]
        _require_unique(data.get("numbers"), "numbers")
