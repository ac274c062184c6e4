"""Schemas for stored results as served by the history API and the live feed."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from marshmallow import Schema, fields, validate


@lru_cache(maxsize=None)
def result_schema_for(draw_schema: type[Schema]) -> Schema:
    """Build (once) the result schema whose draw and guesses use ``draw_schema``."""

    result_schema = Schema.from_dict(
        {
            "id": fields.Integer(required=True),
            "lottery_type": fields.String(required=True),
            "draw": fields.Nested(draw_schema, required=True),
            "guesses": fields.List(fields.Nested(draw_schema), required=True),
            "score": fields.Float(required=True, validate=validate.Range(min=0.0, max=1.0)),
            "timestamp": fields.DateTime(required=True),
        },
        name=f"{draw_schema.__name__.removesuffix('Schema')}ResultSchema",
    )
    return result_schema()


def dump_result(draw_schema: type[Schema], record: Any) -> dict[str, Any]:
    return result_schema_for(draw_schema).dump(record)


def encode_result(draw_schema: type[Schema], record: Any) -> str:
    """Serialize a result to the JSON text pushed to live feed subscribers."""

    return json.dumps(dump_result(draw_schema, record))


class WinsResponseSchema(Schema):
    wins = fields.Integer(required=True)
