from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum

from flask import jsonify


def to_json(value):
    """Plain JSON-able structure for report records (dataclasses, lists, dicts)."""
    if hasattr(value, "as_dict"):
        return value.as_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    return value


def json_ok(data, status: int = 200):
    return jsonify({"success": True, "data": to_json(data)}), status


def json_error(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status
