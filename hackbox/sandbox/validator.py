"""
Static code validation for submitted solutions.

This is the FIRST line of defense. It performs static analysis on submitted
code (after transliteration, for bridged languages) to reject obviously
dangerous patterns before anything is executed. Runtime restrictions in
executor.py still apply to code that passes.
"""

import ast
from dataclasses import dataclass
from typing import Set, List, Optional


class ValidationError(Exception):
    """Raised when code fails validation."""
    
    def __init__(self, message: str, violations: List[str]):
        self.message = message
        self.violations = violations
        super().__init__(f"{message}: {', '.join(violations)}")


@dataclass
class ValidationResult:
    """Result of code validation."""
    valid: bool
    violations: List[str]
    imports_used: Set[str]


# Modules that are NEVER allowed
FORBIDDEN_MODULES = frozenset({
    # System access
    "os", "sys", "subprocess", "shutil", "pathlib",
    "glob", "fnmatch", "tempfile", "io",
    
    # Network
    "socket", "http", "urllib", "requests", "httpx",
    "aiohttp", "websocket", "ssl", "ftplib", "smtplib",
    
    # Process/threading (escape vectors)
    "multiprocessing", "threading", "concurrent",
    "_thread", "signal", "asyncio",
    
    # Code execution
    "code", "codeop", "importlib", "runpy",
    "types", "builtins", "__builtins__",
    
    # Introspection (info leak)
    "inspect", "gc", "traceback", "linecache",
    
    # Dangerous stdlib
    "ctypes", "pickle", "shelve", "marshal",
    "pty", "tty", "termios", "fcntl",
    "resource", "mmap", "sysconfig",
})

# Modules a solution may import (whitelist)
ALLOWED_MODULES = frozenset({
    # Data structures
    "collections", "heapq", "bisect", "array",
    "dataclasses", "enum", "typing",
    
    # Math
    "math", "cmath", "decimal", "fractions",
    "random", "statistics",
    
    # Strings
    "string", "re", "json",
    
    # Iteration/functional
    "itertools", "functools", "operator",
    
    "copy",
})

# Dangerous built-in functions
FORBIDDEN_BUILTINS = frozenset({
    "eval", "exec", "compile", "__import__",
    "open", "input", "breakpoint",
    "globals", "locals", "vars", "dir",
    "getattr", "setattr", "delattr", "hasattr",
    "memoryview",
})

# Dangerous attribute access patterns
FORBIDDEN_ATTRIBUTES = frozenset({
    "__class__", "__bases__", "__subclasses__",
    "__mro__", "__globals__", "__code__",
    "__builtins__", "__import__", "__loader__",
    "__spec__", "__dict__",
})


class CodeValidator:
    """
    Validates submitted Python code before execution.
    
    Uses AST analysis to detect dangerous patterns. This is one layer of
    protection, not a complete security solution.
    """
    
    def __init__(
        self,
        allowed_modules: Optional[Set[str]] = None,
        forbidden_modules: Optional[Set[str]] = None,
        forbidden_builtins: Optional[Set[str]] = None,
        max_code_length: int = 50_000,
    ):
        self.allowed_modules = allowed_modules or ALLOWED_MODULES
        self.forbidden_modules = forbidden_modules or FORBIDDEN_MODULES
        self.forbidden_builtins = forbidden_builtins or FORBIDDEN_BUILTINS
        self.max_code_length = max_code_length
    
    def validate(self, code: str) -> ValidationResult:
        """
        Validate Python code for security issues.
        
        Returns ValidationResult with valid=False if any issues found.
        """
        violations = []
        imports_used: Set[str] = set()
        
        if len(code) > self.max_code_length:
            violations.append(f"Code exceeds maximum length ({len(code)} > {self.max_code_length})")
            return ValidationResult(valid=False, violations=violations, imports_used=imports_used)
        
        try:
            tree = ast.parse(code)
        except SyntaxError as e:
            violations.append(f"Syntax error: {e}")
            return ValidationResult(valid=False, violations=violations, imports_used=imports_used)
        
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    violations.extend(self._check_module(alias.name, imports_used))
            
            elif isinstance(node, ast.ImportFrom):
                if node.level:
                    violations.append("Relative imports are not allowed")
                elif node.module:
                    violations.extend(self._check_module(node.module, imports_used, prefix="from "))
            
            elif isinstance(node, ast.Call):
                if isinstance(node.func, ast.Name):
                    if node.func.id in self.forbidden_builtins:
                        violations.append(f"Forbidden builtin: {node.func.id}()")
            
            elif isinstance(node, ast.Attribute):
                if node.attr in FORBIDDEN_ATTRIBUTES:
                    violations.append(f"Forbidden attribute access: .{node.attr}")
            
            elif isinstance(node, ast.Constant):
                # getattr-style smuggling, e.g. "__class__" held in a string
                if isinstance(node.value, str) and node.value in FORBIDDEN_ATTRIBUTES:
                    violations.append(f"Suspicious string constant: '{node.value}'")
        
        return ValidationResult(
            valid=len(violations) == 0,
            violations=violations,
            imports_used=imports_used,
        )
    
    def _check_module(self, name: str, imports_used: Set[str], prefix: str = "") -> List[str]:
        module = name.split('.')[0]
        imports_used.add(module)
        if module in self.forbidden_modules:
            return [f"Forbidden import: {prefix}{module}"]
        if module not in self.allowed_modules:
            return [f"Disallowed import: {prefix}{module} (not in whitelist)"]
        return []
    
    def validate_or_raise(self, code: str) -> ValidationResult:
        """Validate and raise ValidationError if invalid."""
        result = self.validate(code)
        if not result.valid:
            raise ValidationError("Code validation failed", result.violations)
        return result
