"""Routing and orchestration: the command router and the executor."""

from .executor import ExecutorStats, KeystrokeResult, PendingSequence, VimExecutor
from .router import CommandRouter, RouteNode, RouteResult

__all__ = [
    "CommandRouter",
    "ExecutorStats",
    "KeystrokeResult",
    "PendingSequence",
    "RouteNode",
    "RouteResult",
    "VimExecutor",
]
