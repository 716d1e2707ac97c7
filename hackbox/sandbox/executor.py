"""
Sandboxed execution of submitted solutions.

Every call to SandboxExecutor.execute() evaluates the submission in a freshly
spawned interpreter, so nothing a solution defines or mutates can be seen by
the next test case or the next submission.

SECURITY MODEL:
1. Static validation (validator.py) - reject obviously dangerous code
2. Restricted builtins - minimal Python environment, whitelisted imports
3. Resource limits - CPU, memory, output size
4. Process isolation - separate interpreter per invocation
5. Timeout enforcement - hard kill on wall-clock timeout

LIMITATIONS:
- No namespace isolation (would need nsjail/bubblewrap for production)
- No network isolation (would need iptables/unshare for production)
- Relies on static analysis catching dangerous patterns
"""

import builtins
import logging
import math
import multiprocessing
import pickle
import resource
import sys
import time
import traceback
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..config import SANDBOX_TIMEOUT_SECONDS, SANDBOX_MEMORY_MB, SANDBOX_MAX_OUTPUT_BYTES
from .validator import ALLOWED_MODULES, CodeValidator, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SandboxResult:
    """Result of one sandboxed invocation."""
    success: bool
    result: Any  # The return value if success
    entry_function: Optional[str]  # Name that was resolved and called
    error: Optional[str]  # Error message if failed
    error_type: Optional[str]  # Exception type if failed
    stdout: str
    stderr: str
    execution_time_ms: int


class SandboxError(Exception):
    """Base exception for sandbox errors."""
    pass


class ResolutionError(SandboxError):
    """No recognized solution function is defined by the submission."""
    pass


def _restricted_import(name, globals=None, locals=None, fromlist=(), level=0):
    if level != 0 or name.split('.')[0] not in ALLOWED_MODULES:
        raise ImportError(f"Import of '{name}' is not allowed")
    return builtins.__import__(name, globals, locals, fromlist, level)


# Restricted builtins - absolute minimum needed for computation
RESTRICTED_BUILTINS = {
    # Types
    'None': None,
    'True': True,
    'False': False,
    'int': int,
    'float': float,
    'bool': bool,
    'str': str,
    'list': list,
    'tuple': tuple,
    'dict': dict,
    'set': set,
    'frozenset': frozenset,
    'object': object,

    # Functions
    'abs': abs,
    'all': all,
    'any': any,
    'bin': bin,
    'callable': callable,
    'chr': chr,
    'divmod': divmod,
    'enumerate': enumerate,
    'filter': filter,
    'format': format,
    'hash': hash,
    'hex': hex,
    'isinstance': isinstance,
    'issubclass': issubclass,
    'iter': iter,
    'len': len,
    'map': map,
    'max': max,
    'min': min,
    'next': next,
    'oct': oct,
    'ord': ord,
    'pow': pow,
    'print': print,  # Captured to stdout
    'range': range,
    'repr': repr,
    'reversed': reversed,
    'round': round,
    'slice': slice,
    'sorted': sorted,
    'sum': sum,
    'zip': zip,

    # Classes inside solutions
    '__build_class__': builtins.__build_class__,
    'classmethod': classmethod,
    'staticmethod': staticmethod,
    'property': property,
    'super': super,

    # Whitelisted imports only
    '__import__': _restricted_import,

    # Exceptions (for raising and catching)
    'Exception': Exception,
    'ArithmeticError': ArithmeticError,
    'AssertionError': AssertionError,
    'AttributeError': AttributeError,
    'ValueError': ValueError,
    'TypeError': TypeError,
    'KeyError': KeyError,
    'IndexError': IndexError,
    'NotImplementedError': NotImplementedError,
    'RuntimeError': RuntimeError,
    'StopIteration': StopIteration,
    'ZeroDivisionError': ZeroDivisionError,
    'OverflowError': OverflowError,
}


def _set_resource_limits(memory_mb: int, cpu_seconds: int):
    """Set resource limits for the current process (Linux only)."""
    try:
        memory_bytes = memory_mb * 1024 * 1024
        resource.setrlimit(resource.RLIMIT_AS, (memory_bytes, memory_bytes))
        resource.setrlimit(resource.RLIMIT_CPU, (cpu_seconds, cpu_seconds))

        # No forking, no files, no core dumps
        resource.setrlimit(resource.RLIMIT_NPROC, (0, 0))
        resource.setrlimit(resource.RLIMIT_FSIZE, (0, 0))
        resource.setrlimit(resource.RLIMIT_CORE, (0, 0))

    except (ValueError, OSError) as e:
        # Resource limits may not be available on all systems
        logger.warning("Could not set resource limits: %s", e)


def _resolve_entry_function(namespace: dict, entry_functions: Sequence[str]):
    """Return (name, callable) for the first candidate bound in namespace.

    Only the submission's own bindings are searched, never builtins, so a
    candidate such as ``sum`` resolves only when the submission defines it.
    """
    for name in entry_functions:
        candidate = namespace.get(name)
        if callable(candidate):
            return name, candidate
    raise ResolutionError("No matching solution function found")


def _run_in_sandbox(
    code: str,
    entry_functions: Sequence[str],
    args: tuple,
    memory_mb: int,
    cpu_seconds: int,
    conn,
):
    """
    Run code in a sandboxed subprocess.

    This function runs in a separate process with resource limits. The
    result is sent back over ``conn`` as a SandboxResult.
    """
    import io

    captured_stdout = io.StringIO()
    captured_stderr = io.StringIO()
    old_stdout, old_stderr = sys.stdout, sys.stderr

    result = SandboxResult(
        success=False,
        result=None,
        entry_function=None,
        error=None,
        error_type=None,
        stdout="",
        stderr="",
        execution_time_ms=0,
    )

    start_time = time.perf_counter()
    try:
        # Set resource limits BEFORE executing any user code
        _set_resource_limits(memory_mb, cpu_seconds)

        sys.stdout = captured_stdout
        sys.stderr = captured_stderr

        namespace = {
            '__builtins__': RESTRICTED_BUILTINS,
            '__name__': '__sandbox__',
            '__doc__': None,
            # Pre-bound for transliterated Math.* calls
            'math': math,
        }

        exec(compile(code, "<submission>", "exec"), namespace)

        name, func = _resolve_entry_function(namespace, entry_functions)
        result.entry_function = name

        call_result = func(*args)

        # Values that cannot cross the process boundary are sent as text
        try:
            pickle.dumps(call_result)
        except Exception:
            call_result = str(call_result)

        result.success = True
        result.result = call_result

    except MemoryError:
        result.error = "Memory limit exceeded"
        result.error_type = "MemoryError"
    except RecursionError:
        result.error = "Maximum recursion depth exceeded"
        result.error_type = "RecursionError"
    except Exception as e:
        result.error = str(e) or type(e).__name__
        result.error_type = type(e).__name__
        # Include traceback in stderr for debugging
        traceback.print_exc(file=captured_stderr)
    finally:
        result.execution_time_ms = int((time.perf_counter() - start_time) * 1000)

        sys.stdout = old_stdout
        sys.stderr = old_stderr

        result.stdout = captured_stdout.getvalue()[:SANDBOX_MAX_OUTPUT_BYTES]
        result.stderr = captured_stderr.getvalue()[:SANDBOX_MAX_OUTPUT_BYTES]

    try:
        conn.send(result)
    finally:
        conn.close()


class SandboxExecutor:
    """
    Executes a submitted solution in a sandboxed child process.

    Usage:
        executor = SandboxExecutor()
        result = executor.execute(
            code="def sum(a, b):\\n    return a + b",
            entry_functions=["helloWorld", "sum"],
            args=(2, 3),
        )
    """

    def __init__(
        self,
        timeout_seconds: float = SANDBOX_TIMEOUT_SECONDS,
        memory_mb: int = SANDBOX_MEMORY_MB,
        validate: bool = True,
    ):
        self.timeout_seconds = timeout_seconds
        self.memory_mb = memory_mb
        self.validate = validate
        self.validator = CodeValidator()

    def execute(
        self,
        code: str,
        entry_functions: Sequence[str],
        args: Sequence[Any] = (),
    ) -> SandboxResult:
        """
        Execute code in sandbox and return result.

        Args:
            code: Python source defining the solution
            entry_functions: Ordered names to probe; the first one bound to a
                callable is called, later names are never tried
            args: Positional arguments for the call

        Returns:
            SandboxResult with success status, result/error, and captured output
        """
        if self.validate:
            try:
                self.validator.validate_or_raise(code)
            except ValidationError as e:
                return self._failure(str(e), "ValidationError")

        # Spawn (not fork) so the child never inherits locks held by server threads
        ctx = multiprocessing.get_context('spawn')
        parent_conn, child_conn = ctx.Pipe(duplex=False)

        process = ctx.Process(
            target=_run_in_sandbox,
            args=(
                code,
                list(entry_functions),
                tuple(args),
                self.memory_mb,
                math.ceil(self.timeout_seconds) + 1,
                child_conn,
            ),
            daemon=True,
        )

        process.start()
        child_conn.close()

        try:
            if not parent_conn.poll(self.timeout_seconds):
                logger.info("Sandbox invocation timed out after %ss", self.timeout_seconds)
                return self._failure(
                    f"Execution exceeded time limit ({self.timeout_seconds:g}s)",
                    "TimeoutError",
                    execution_time_ms=int(self.timeout_seconds * 1000),
                )
            result = parent_conn.recv()
        except EOFError:
            # Child died before reporting (e.g. killed by the CPU limit)
            return self._failure("Sandbox process exited without a result", "SandboxError")
        finally:
            parent_conn.close()
            self._reap(process)

        if result.stdout or result.stderr:
            logger.debug(
                "Captured solution output (stdout=%r, stderr=%r)",
                result.stdout, result.stderr,
            )
        return result

    @staticmethod
    def _reap(process):
        process.join(timeout=1)
        if process.is_alive():
            process.terminate()
            process.join(timeout=2)
            if process.is_alive():
                process.kill()
                process.join()

    @staticmethod
    def _failure(error: str, error_type: str, execution_time_ms: int = 0) -> SandboxResult:
        return SandboxResult(
            success=False,
            result=None,
            entry_function=None,
            error=error,
            error_type=error_type,
            stdout="",
            stderr="",
            execution_time_ms=execution_time_ms,
        )
