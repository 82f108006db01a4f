"""Exceptions raised across the evaluator boundary.

Business-rule failures are never raised; they are reported as phase results.
"""

from __future__ import annotations


class ContractViolationError(ValueError):
    """The caller passed something that is not a usable validation request."""


class ContextOverwriteError(RuntimeError):
    """A phase tried to replace a fact an earlier phase already resolved."""
