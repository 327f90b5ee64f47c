"""Middleware chain package for the request pipeline.

Exports the core middleware building blocks so call sites import from one
stable namespace::

    from sdkkernel.middleware import (
        Middleware, MiddlewareStack, compose_middleware,
        AccessTokenMiddleware, LogMiddleware, NotEligibleResponseMiddleware,
    )
"""
from __future__ import annotations

from sdkkernel.middleware.access_token import AccessTokenMiddleware
from sdkkernel.middleware.chain import (
    Handler,
    Middleware,
    MiddlewareStack,
    compose_middleware,
)
from sdkkernel.middleware.eligibility import NotEligibleResponseMiddleware
from sdkkernel.middleware.log import LogMiddleware

__all__ = [
    "Handler",
    "Middleware",
    "MiddlewareStack",
    "compose_middleware",
    "AccessTokenMiddleware",
    "LogMiddleware",
    "NotEligibleResponseMiddleware",
]
