"""
Error types raised by skelseg.
"""

from __future__ import annotations


class SkelsegError(Exception):
    """Base for all skelseg errors."""


class PreconditionViolation(SkelsegError, ValueError):
    """Input violates a precondition of the operation; nothing was modified."""
