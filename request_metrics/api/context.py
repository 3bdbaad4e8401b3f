"""Route-match context carried in the ASGI scope.

A router upstream of the recorder stores the matched route pattern under
``MATCHED_ROUTE_PATH_KEY``.  The recorder only reads it.
"""

from typing import Optional

from starlette.types import Scope

MATCHED_ROUTE_PATH_KEY = "request_metrics.matched_route_path"


def set_matched_route_path(scope: Scope, pattern: str) -> None:
    """Attach the matched route pattern to the request scope."""
    scope[MATCHED_ROUTE_PATH_KEY] = pattern


def get_matched_route_path(scope: Scope) -> Optional[str]:
    """Return the matched route pattern for this request, if any.

    The explicit context key wins over the route FastAPI stores in
    ``scope["route"]`` once routing has happened.  A route template is
    relative to the app it is mounted in, so the mount prefix collected in
    ``scope["root_path"]`` is put in front of it.
    """
    pattern = scope.get(MATCHED_ROUTE_PATH_KEY)
    if isinstance(pattern, str):
        return pattern

    route_path = getattr(scope.get("route"), "path", None)
    if isinstance(route_path, str):
        return scope.get("root_path", "").rstrip("/") + route_path

    return None

