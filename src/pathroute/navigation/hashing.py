"""Stable 53-bit identity hash for page render functions.

cyrb53 (bryc, public domain): two 32-bit accumulators mixed with
multiply-xor passes over every UTF-16 code unit of ``name + source``,
then avalanched and folded into 53 bits.  Identical text always hashes
identically, across processes and interpreter runs.

The hash identifies a page by its *text*, so two functions with the same
name and source collide, and reformatting a page changes its hash.  The
navigation index is only reliable when the page object hashed at build
time is the one looked up later.
"""

import inspect
from collections.abc import Callable
from typing import Any

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply, unsigned result."""
    return (a * b) & _MASK32


def cyrb53(text: str, seed: int = 0) -> int:
    """Hash *text* into a non-negative integer below ``2**53``."""
    h1 = (0xDEADBEEF ^ seed) & _MASK32
    h2 = (0x41C6CE57 ^ seed) & _MASK32
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        ch = data[i] | (data[i + 1] << 8)
        h1 = _imul(h1 ^ ch, 2654435761)
        h2 = _imul(h2 ^ ch, 1597334677)
    h1 = _imul(h1 ^ (h1 >> 16), 2246822507) ^ _imul(h2 ^ (h2 >> 13), 3266489909)
    h2 = _imul(h2 ^ (h2 >> 16), 2246822507) ^ _imul(h1 ^ (h1 >> 13), 3266489909)
    return 4294967296 * (2097151 & h2) + h1


def function_source(fn: Callable[..., Any]) -> str:
    """Return the source text of *fn*, or a stable stand-in when unavailable.

    Builtins, lambdas defined in a REPL and C callables have no retrievable
    source; they are identified by qualified name, module and first line.
    """
    try:
        return inspect.getsource(fn)
    except (OSError, TypeError):
        code = getattr(fn, "__code__", None)
        line = code.co_firstlineno if code is not None else 0
        module = getattr(fn, "__module__", None) or ""
        qualname = getattr(fn, "__qualname__", None) or repr(fn)
        return f"<{module}.{qualname}:{line}>"


def function_hash(fn: Callable[..., Any]) -> int:
    """Hash a page render function by ``name + source``."""
    name = getattr(fn, "__name__", "") or ""
    return cyrb53(name + function_source(fn))
