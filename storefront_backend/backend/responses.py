"""
PATH: backend/responses.py

API ERROR NORMALIZATION

Domain errors (cart rules, image upload) are returned as:
    {"error": {"code": "<machine_code>", "message": "<human message>"}}

Serializer validation errors keep DRF's default {field: [messages]} shape.
"""

from __future__ import annotations

from rest_framework.response import Response


def error_response(*, code: str, message: str, http_status: int) -> Response:
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )
