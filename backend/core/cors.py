"""CORS handling shared by every route.

Preflight requests are answered here, before routing, so they never reach
authentication. Every other response gets the same headers attached.
"""
from fastapi import Request, Response

from config.settings import get_settings


async def cors_middleware(request: Request, call_next):
    cors_headers = get_settings().cors_headers

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers)

    response = await call_next(request)
    response.headers.update(cors_headers)
    return response
