"""Permissive CORS answer for explicit OPTIONS routes."""

from fastapi import Response


def cors_preflight(methods: str) -> Response:
    """Empty 200 response carrying permissive CORS headers."""
    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )
