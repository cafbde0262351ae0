"""
Function-call overhead variants.

Every function here squares (or increments) each element of a sequence,
differing only in how many Python-level calls happen per element.
"""


def square(v):
    return v * v


def _square_inner(v):
    return square(v)


def _square_outer(v):
    return _square_inner(v)


def square_inline(values):
    """Arithmetic written directly in the comprehension, no calls."""
    return [v * v for v in values]


def square_via_function(values):
    return [square(v) for v in values]


def square_via_lambda(values):
    sq = lambda v: v * v  # noqa: E731
    return [sq(v) for v in values]


def square_via_map(values):
    return list(map(square, values))


def square_via_wrappers(values):
    """Three nested calls per element."""
    return [_square_outer(v) for v in values]


def add_one(v):
    return v + 1


def add_chain_inline(values, depth=3):
    return [v + depth for v in values]


def add_chain_calls(values, depth=3):
    """Add `depth` by calling `add_one` depth times per element."""
    result = []
    for v in values:
        for _ in range(depth):
            v = add_one(v)
        result.append(v)
    return result
