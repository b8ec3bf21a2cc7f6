# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Route table mapping (verb, path) pairs onto actions.

Transports own the wire; this module only answers "which action, which
version, which path params" for a verb and a path, and turns the answer into
a ``RequestEnvelope`` for the dispatcher.

Usage:
    routes = RouteTable()
    routes.register_route("get", "/users/:id", "getUser", api_version=2)
    routes.register_route("all", "/files/:path", "serveFile", match_trailing_path_parts=True)

    match = routes.match("GET", "/users/42")
    request = match.to_request({"verbose": True})
    envelope = await dispatcher.handle(request)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from .actions.envelope import RequestEnvelope
from .config import VERSION_PARAM

__all__ = ("ROUTER_METHODS", "Route", "RouteMatch", "RouteMethod", "RouteTable")

RouteMethod = Literal["all", "head", "get", "patch", "post", "put", "delete"]

ROUTER_METHODS: tuple[str, ...] = ("all", "head", "get", "patch", "post", "put", "delete")


def _segments(path: str) -> list[str]:
    return [part for part in path.strip().split("/") if part]


@dataclass(frozen=True, slots=True)
class Route:
    method: str
    path: str
    action: str
    api_version: int | str | None = None
    match_trailing_path_parts: bool = False
    dir: str | None = None

    def match(self, path: str) -> dict[str, str] | None:
        """Return captured ``:name`` params if ``path`` matches, else None."""
        pattern = _segments(self.path)
        parts = _segments(path)

        if len(parts) < len(pattern):
            return None
        if len(parts) > len(pattern):
            if not (self.match_trailing_path_parts and pattern and pattern[-1].startswith(":")):
                return None

        params: dict[str, str] = {}
        for i, expected in enumerate(pattern):
            is_last = i == len(pattern) - 1
            if expected.startswith(":"):
                if is_last and self.match_trailing_path_parts:
                    params[expected[1:]] = "/".join(parts[i:])
                else:
                    params[expected[1:]] = parts[i]
            elif expected.lower() != parts[i].lower():
                return None
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    params: dict[str, str] = field(default_factory=dict)

    def to_request(self, raw_params: dict[str, Any] | None = None) -> RequestEnvelope:
        """Merge path params over ``raw_params`` and pin the route's version."""
        merged: dict[str, Any] = {**(raw_params or {}), **self.params}
        api_version = self.route.api_version
        if api_version is None:
            api_version = merged.get(VERSION_PARAM)
        return RequestEnvelope(action=self.route.action, api_version=api_version, params=merged)


class RouteTable:
    """Ordered routes per verb; the first registered match wins."""

    def __init__(self):
        self._routes: dict[str, list[Route]] = {m: [] for m in ROUTER_METHODS}

    def register_route(
        self,
        method: str,
        path: str,
        action: str,
        api_version: int | str | None = None,
        match_trailing_path_parts: bool = False,
        dir: str | None = None,
    ) -> list[Route]:
        """Register a route; ``"all"`` registers it for every verb.

        Raises:
            ValueError: If ``method`` is not a known verb
        """
        method = method.lower()
        if method not in ROUTER_METHODS:
            raise ValueError(f"Unknown route method '{method}'. Expected one of {ROUTER_METHODS}")

        verbs = ROUTER_METHODS if method == "all" else (method,)
        added = []
        for verb in verbs:
            route = Route(
                method=verb,
                path=path,
                action=action,
                api_version=api_version,
                match_trailing_path_parts=match_trailing_path_parts,
                dir=dir,
            )
            self._routes[verb].append(route)
            added.append(route)
        return added

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Find the first route for ``method`` (falling back to ``all``) matching ``path``."""
        method = method.lower()
        candidates = self._routes.get(method, [])
        if method != "all":
            candidates = candidates + self._routes["all"]
        for route in candidates:
            params = route.match(path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    def routes(self, method: str | None = None) -> list[Route]:
        if method is None:
            return [r for verb in ROUTER_METHODS for r in self._routes[verb]]
        return list(self._routes.get(method.lower(), []))

    def clear(self) -> None:
        for routes in self._routes.values():
            routes.clear()

    def __len__(self) -> int:
        return sum(len(r) for r in self._routes.values())

    def __repr__(self) -> str:
        return f"RouteTable(routes={len(self)})"
