"""CORS Envelope — fixed CORS headers applied to every contact endpoint response.

Invariants:
    - Allow-Origin is the configured frontend origin (default "*")
    - Applied to success, error, 405 and OPTIONS responses alike

Design Decisions:
    - Explicit headers over Starlette's CORSMiddleware: the middleware only answers
      requests carrying an Origin header, and error responses produced by
      exception handlers must carry the headers too
"""

from starlette.responses import Response

ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"


def cors_headers(origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }


def apply_cors(response: Response, origin: str) -> Response:
    """Set the CORS headers on `response` in place and return it."""
    for name, value in cors_headers(origin).items():
        response.headers[name] = value
    return response
