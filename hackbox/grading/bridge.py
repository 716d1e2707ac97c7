"""
JavaScript to Python transliteration.

This is a best-effort *syntactic* rewrite, not an interpreter. It covers the
subset of JavaScript that beginner challenges need:

- function declarations, if / else if / else, while, try / catch / finally,
  counting for loops and for...of / for...in loops
- let/const/var declarations, including several in one statement
- ===, !==, &&, ||, !, ++ and --
- true/false/null/undefined, .length, console.log, common Math and string
  methods, Array.push, throw

Braces become indentation. Arrow functions, ternaries, object literals with
content, classes, template literals, regular expression literals, Map/Set and
chained array methods are NOT translated; code using them comes out as Python
that fails to compile or behaves differently, and the failure is reported like
any other error in the submission.
"""

import re
from typing import List

INDENT = "    "

_STRING_RE = re.compile(r'"(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\'|`(?:\\.|[^`\\])*`')

_FUNCTION_RE = re.compile(r"^function\s+(\w+)\s*\((.*)\)$")
_IF_RE = re.compile(r"^if\s*\((.*)\)$")
_ELSE_IF_RE = re.compile(r"^else\s+if\s*\((.*)\)$")
_WHILE_RE = re.compile(r"^while\s*\((.*)\)$")
_CATCH_RE = re.compile(r"^catch\s*(?:\(\s*(\w+)\s*\))?$")
_FOR_EACH_RE = re.compile(r"^for\s*\(\s*(?:let|const|var)?\s*(\w+)\s+(?:of|in)\s+(.+)\)$")
_FOR_RANGE_RE = re.compile(
    r"^for\s*\(\s*(?:let|var)?\s*(\w+)\s*=\s*([^;]+?)\s*;"
    r"\s*(\w+)\s*(<=|<|>=|>)\s*([^;]+?)\s*;"
    r"\s*(\+\+\s*\w+|--\s*\w+|\w+\s*\+\+|\w+\s*--|\w+\s*[+-]=\s*1)\s*\)$"
)

_INCREMENT_RE = re.compile(r"^(?:(\w+)\s*(\+\+|--)|(\+\+|--)\s*(\w+))$")
_THROW_RE = re.compile(r"^throw\s+(?:new\s+\w*Error\((.*)\)|(.+))$")
_INLINE_BLOCK_RE = re.compile(r"^(?:if|else\s+if|while|for)\s*\(")
_INLINE_ELSE_RE = re.compile(r"^else\s+(?!if\b)(.+)$")
_LENGTH_RE = re.compile(r"((?:[\w.]|\[[^\[\]]*\])+)\.length\b")
_DECLARATION_RE = re.compile(r"^(?:let|const|var)\s+(.+)$")
_HEADER_OPEN_RE = re.compile(r"^(?:function\s+\w+|(?:else\s+)?if|while|for|catch)\s*\(")
_CONTINUATION_RE = re.compile(r"[-+*/%=<>&|^!?:,]$")

_SUBSTITUTIONS = [
    (re.compile(r"\b(?:let|const|var)\s+"), ""),
    (re.compile(r"==="), "=="),
    (re.compile(r"!=="), "!="),
    (re.compile(r"&&"), " and "),
    (re.compile(r"\|\|"), " or "),
    (re.compile(r"!(?!=)"), " not "),
    (re.compile(r"\btrue\b"), "True"),
    (re.compile(r"\bfalse\b"), "False"),
    (re.compile(r"\b(?:null|undefined)\b"), "None"),
    (re.compile(r"\bconsole\.(?:log|info|warn|error)\("), "print("),
    (re.compile(r"\bMath\.(max|min)\(\s*\.\.\."), r"\1("),
    (re.compile(r"\bMath\.(max|min|abs|round|pow)\("), r"\1("),
    (re.compile(r"\bMath\.(floor|ceil|sqrt|trunc)\("), r"math.\1("),
    (re.compile(r"\bMath\.PI\b"), "math.pi"),
    (re.compile(r"\bparseInt\("), "int("),
    (re.compile(r"\bparseFloat\("), "float("),
    (re.compile(r"\bString\("), "str("),
    (re.compile(r"\.push\("), ".append("),
    (re.compile(r"\.toLowerCase\(\)"), ".lower()"),
    (re.compile(r"\.toUpperCase\(\)"), ".upper()"),
    (re.compile(r"\.trim\(\)"), ".strip()"),
    (_LENGTH_RE, r"len(\1)"),
    (re.compile(r"(?<=\S) {2,}"), " "),
]


def _split_statements(source: str) -> List[str]:
    """Split source into statements, block openers ending in '{', and '}'.

    Semicolons, newlines and braces separate statements unless they sit
    inside a string literal or inside parentheses/brackets. A newline does
    not end a statement that is still incomplete: one ending in an operator
    or comma, or a block header waiting for its brace or body on the next
    line. Comments are dropped.
    """
    statements: List[str] = []
    current: List[str] = []
    depth = 0
    quote = None
    i, n = 0, len(source)

    def flush():
        text = "".join(current).strip()
        if text:
            statements.append(text)
        current.clear()

    while i < n:
        ch = source[i]
        if quote:
            current.append(ch)
            if ch == "\\" and i + 1 < n:
                current.append(source[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
            current.append(ch)
        elif source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end == -1 else end
            continue
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        elif ch in "([":
            depth += 1
            current.append(ch)
        elif ch in ")]":
            depth = max(depth - 1, 0)
            current.append(ch)
        elif depth:
            current.append(" " if ch == "\n" else ch)
        elif ch == "{":
            closing = source.find("}", i + 1)
            preceding = "".join(current).rstrip()
            if (
                closing != -1
                and not source[i + 1:closing].strip()
                and preceding.endswith(("=", ",", ":", "return"))
            ):
                # empty object literal
                current.append("{}")
                i = closing + 1
                continue
            current.append("{")
            flush()
        elif ch == "}":
            flush()
            statements.append("}")
        elif ch == ";":
            flush()
        elif ch == "\n":
            if _awaits_more("".join(current).strip()):
                current.append(" ")
            else:
                flush()
        else:
            current.append(ch)
        i += 1

    flush()
    return statements


def _rewrite_code(code: str) -> str:
    for pattern, replacement in _SUBSTITUTIONS:
        code = pattern.sub(replacement, code)
    return code


def rewrite_expression(text: str) -> str:
    """Rewrite JavaScript operators, literals and built-ins outside strings."""
    parts = []
    last = 0
    for match in _STRING_RE.finditer(text):
        parts.append(_rewrite_code(text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(_rewrite_code(text[last:]))
    return "".join(parts).strip()


def _rewrite_for_range(match) -> str:
    var, start, cond_var, op, stop, step = match.groups()
    if cond_var != var:
        return ""
    start = rewrite_expression(start)
    stop = rewrite_expression(stop)
    ascending = "+" in step
    if ascending and op == "<":
        return f"for {var} in range({start}, {stop}):"
    if ascending and op == "<=":
        return f"for {var} in range({start}, {stop} + 1):"
    if not ascending and op == ">":
        return f"for {var} in range({start}, {stop}, -1):"
    if not ascending and op == ">=":
        return f"for {var} in range({start}, {stop} - 1, -1):"
    return ""


def rewrite_header(header: str) -> str:
    """Rewrite the part of a block opener before its '{' into a Python header."""
    match = _FUNCTION_RE.match(header)
    if match:
        return f"def {match.group(1)}({rewrite_expression(match.group(2))}):"

    match = _ELSE_IF_RE.match(header)
    if match:
        return f"elif {rewrite_expression(match.group(1))}:"

    match = _IF_RE.match(header)
    if match:
        return f"if {rewrite_expression(match.group(1))}:"

    match = _WHILE_RE.match(header)
    if match:
        return f"while {rewrite_expression(match.group(1))}:"

    match = _FOR_RANGE_RE.match(header)
    if match:
        rewritten = _rewrite_for_range(match)
        if rewritten:
            return rewritten

    match = _FOR_EACH_RE.match(header)
    if match:
        return f"for {match.group(1)} in {rewrite_expression(match.group(2))}:"

    match = _CATCH_RE.match(header)
    if match:
        name = match.group(1)
        return f"except Exception as {name}:" if name else "except Exception:"

    if header in ("else", "try", "finally"):
        return f"{header}:"
    if not header:
        return "if True:"

    # Unsupported construct, left for the compiler to reject
    return f"{rewrite_expression(header)}:"


def _matching_paren(text: str, start: int) -> int:
    """Index of the ')' closing the '(' at ``start``, or -1. Skips strings."""
    depth = 0
    quote = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _awaits_more(text: str) -> bool:
    """Whether a line break after ``text`` continues the same statement."""
    if not text or text.endswith(("++", "--")):
        return False
    if text in ("else", "try", "finally", "catch") or _CONTINUATION_RE.search(text):
        return True
    # A block header still waiting for its '{' or its body
    match = _HEADER_OPEN_RE.match(text)
    return bool(match) and _matching_paren(text, match.end() - 1) == len(text) - 1


def _split_top_level(text: str, separator: str) -> List[str]:
    """Split on ``separator`` outside strings, parentheses and brackets."""
    parts: List[str] = []
    start = 0
    depth = 0
    quote = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return parts


def _rewrite_declarator(declarator: str) -> str:
    name, sep, value = declarator.partition("=")
    if not sep:
        return f"{name.strip()} = None"
    return f"{rewrite_expression(name)} = {rewrite_expression(value)}"


def rewrite_statement(statement: str) -> str:
    """Rewrite one simple statement, including brace-less if/else/loop bodies."""
    match = _INLINE_BLOCK_RE.match(statement)
    if match:
        close = _matching_paren(statement, match.end() - 1)
        body = statement[close + 1:].strip() if close != -1 else ""
        if body:
            return f"{rewrite_header(statement[:close + 1])} {rewrite_statement(body)}"

    match = _INLINE_ELSE_RE.match(statement)
    if match:
        return f"else: {rewrite_statement(match.group(1))}"

    match = _INCREMENT_RE.match(statement)
    if match:
        name = match.group(1) or match.group(4)
        op = match.group(2) or match.group(3)
        return f"{name} {'+' if op == '++' else '-'}= 1"

    match = _THROW_RE.match(statement)
    if match:
        message = match.group(1) if match.group(1) is not None else match.group(2)
        return f"raise Exception({rewrite_expression(message)})"

    match = _DECLARATION_RE.match(statement)
    if match:
        return "; ".join(_rewrite_declarator(d) for d in _split_top_level(match.group(1), ","))

    return rewrite_expression(statement)


def transliterate(source: str) -> str:
    """Rewrite JavaScript source into equivalent (best-effort) Python source."""
    lines: List[str] = []
    depth = 0
    # One entry per open block: has the body emitted anything yet?
    open_blocks: List[bool] = []

    def close_block():
        nonlocal depth
        if not open_blocks.pop():
            lines.append(INDENT * depth + "pass")
        depth -= 1

    for statement in _split_statements(source):
        if statement == "}":
            if open_blocks:
                close_block()
            continue

        if open_blocks:
            open_blocks[-1] = True

        if statement.endswith("{"):
            lines.append(INDENT * depth + rewrite_header(statement[:-1].strip()))
            open_blocks.append(False)
            depth += 1
        else:
            lines.append(INDENT * depth + rewrite_statement(statement))

    # Blocks still open at end of input
    while open_blocks:
        close_block()

    return "\n".join(lines) + "\n"
