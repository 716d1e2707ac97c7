"""Sandbox module for isolated solution execution."""

from .executor import SandboxExecutor, SandboxResult, SandboxError
from .validator import CodeValidator, ValidationError

__all__ = ["SandboxExecutor", "SandboxResult", "SandboxError", "CodeValidator", "ValidationError"]
