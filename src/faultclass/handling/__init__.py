"""
Structured fault handling for faultclass.

Provides Plan, the one-shot protected execution boundary with ordered typed
handlers, a wildcard handler and guaranteed cleanups.
"""

from faultclass.handling.plan import Plan, repanic, run

__all__ = [
    "Plan",
    "repanic",
    "run",
]
