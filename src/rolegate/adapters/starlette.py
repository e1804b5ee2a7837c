from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

try:
    from starlette.concurrency import run_in_threadpool  # type: ignore[import-not-found]
    from starlette.responses import JSONResponse  # type: ignore[import-not-found]
except Exception:  # pragma: no cover
    JSONResponse = None  # type: ignore
    run_in_threadpool = None  # type: ignore

from ..core.engine import AccessEngine
from ..dispatch import DispatchGuard

EngineRef = Union[AccessEngine, Callable[[], AccessEngine]]
TargetResolver = Callable[[Any], Tuple[str, str]]


def path_params_target(request: Any) -> Tuple[str, str]:
    """``(controller, action)`` from the route's path parameters, ``"index"`` when absent."""
    params = getattr(request, "path_params", None) or {}
    return str(params.get("controller") or "index"), str(params.get("action") or "index")


def _deny_response(role: str, resource: str, action: str, add_headers: bool) -> Any:
    if JSONResponse is None:  # pragma: no cover
        raise RuntimeError("Install rolegate[starlette] to use the Starlette adapter")
    headers: dict[str, str] = {}
    if add_headers:
        headers["X-Rolegate-Role"] = role
        headers["X-Rolegate-Resource"] = f"{resource}:{action}"
    return JSONResponse({"detail": "Forbidden"}, status_code=403, headers=headers)


def require_access(
    engine: EngineRef,
    resolve_role: Callable[[Any], str],
    *,
    resolve_target: Optional[TargetResolver] = None,
    add_headers: bool = False,
) -> Callable[[Callable[..., Any]], Callable[[Any], Awaitable[Any]]]:
    """Decorate a Starlette endpoint so it runs only when access is allowed.

    *engine* may be an :class:`AccessEngine` or a zero-argument callable
    returning the current one. Denied requests get a 403 JSON response.
    """
    target = resolve_target or path_params_target

    def decorator(handler: Callable[..., Any]) -> Callable[[Any], Awaitable[Any]]:
        is_async = inspect.iscoroutinefunction(handler)

        @functools.wraps(handler)
        async def endpoint(request: Any) -> Any:
            current = engine if isinstance(engine, AccessEngine) else engine()
            guard: DispatchGuard[Any] = DispatchGuard(
                current,
                resolve_request=lambda: target(request),
                resolve_active_role=lambda: resolve_role(request),
                on_allowed=lambda role, resource, action: None,
                on_denied=lambda role, resource, action: _deny_response(
                    role, resource, action, add_headers
                ),
            )
            denied = guard.before_dispatch()
            if denied is not None:
                return denied
            if is_async:
                return await handler(request)
            return await run_in_threadpool(handler, request)

        return endpoint

    return decorator


__all__ = ["require_access", "path_params_target"]
