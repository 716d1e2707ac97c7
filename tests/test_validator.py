"""Tests for code validator."""

import pytest
from hackbox.sandbox.validator import CodeValidator, ValidationError


@pytest.fixture
def validator():
    return CodeValidator()


class TestCodeValidator:
    """Test static code validation."""
    
    def test_valid_simple_code(self, validator):
        """Valid code should pass."""
        code = """
def find_max(numbers):
    best = numbers[0]
    for n in numbers:
        if n > best:
            best = n
    return best
"""
        result = validator.validate(code)
        assert result.valid
        assert len(result.violations) == 0
    
    def test_forbidden_os_import(self, validator):
        """os import should be blocked."""
        code = """
import os
def sum(a, b):
    return a + b
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("os" in v for v in result.violations)
    
    def test_forbidden_subprocess(self, validator):
        """subprocess import should be blocked."""
        code = """
import subprocess
def hello_world():
    return subprocess.check_output(["echo", "hi"])
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("subprocess" in v for v in result.violations)
    
    def test_unlisted_module_rejected(self, validator):
        """Modules outside the whitelist are rejected even if not forbidden."""
        code = """
import numpy
def find_max(numbers):
    return numbers
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("not in whitelist" in v for v in result.violations)
    
    def test_forbidden_eval(self, validator):
        """eval() should be blocked."""
        code = """
def sum(a, b):
    return eval(f"{a} + {b}")
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("eval" in v for v in result.violations)
    
    def test_forbidden_open(self, validator):
        """open() should be blocked."""
        code = """
def hello_world():
    with open('/etc/passwd') as f:
        return f.read()
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("open" in v for v in result.violations)
    
    def test_forbidden_dunder_class(self, validator):
        """__class__ access should be blocked."""
        code = """
def hello_world():
    return ().__class__.__bases__[0]
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("__class__" in v or "__bases__" in v for v in result.violations)
    
    def test_allowed_collections(self, validator):
        """Whitelisted modules are allowed and reported."""
        code = """
from collections import Counter
import math
def is_palindrome(s):
    return Counter(s) == Counter(reversed(s)) and math.isfinite(1.0)
"""
        result = validator.validate(code)
        assert result.valid
        assert {"collections", "math"} <= result.imports_used
    
    def test_syntax_error(self, validator):
        """Syntax errors should fail validation."""
        code = """
def sum(a, b)
    return a + b
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("Syntax error" in v for v in result.violations)
    
    def test_code_length_limit(self, validator):
        """Very long code should fail."""
        code = "x = 1\n" * 10001
        result = validator.validate(code)
        assert not result.valid
        assert any("length" in v.lower() for v in result.violations)
    
    def test_from_import_forbidden(self, validator):
        """from X import should also be blocked for forbidden modules."""
        code = """
from os import path
def sum(a, b):
    return a + b
"""
        result = validator.validate(code)
        assert not result.valid
        assert any("os" in v for v in result.violations)
    
    def test_relative_import_rejected(self, validator):
        """Relative imports have no meaning inside a submission."""
        result = validator.validate("from . import config\n")
        assert not result.valid
    
    def test_validate_or_raise(self, validator):
        """validate_or_raise should raise ValidationError."""
        code = """
import os
def sum(a, b):
    return a + b
"""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise(code)
        assert "os" in str(exc_info.value)
        assert exc_info.value.violations
