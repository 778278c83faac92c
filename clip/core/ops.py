"""Built-in operators. Operators are variadic and strict: every operand is evaluated, left to right, before the
operator is applied to the resulting list of Values. There is no implicit coercion anywhere, not even between
integers and floats, and logical operators only accept booleans.

Fold semantics over v1, v2, ..., vn:

```
+ - * / %        ((v1 op v2) op v3) ...     ; one numeric type; + also concatenates strings
==               v1 equals any of v2..vn    ; () may be compared with anything, other type mixes are errors
> >= < <=        v1 op any of v2..vn        ; one numeric type, or strings
&& ||            all / any of v1..vn        ; booleans only
!                not v1                     ; exactly one boolean
```
"""

import math
import operator

from clip.core import errors
from clip.core.values import Boolean, Float, Integer, String, Unit, wrap

NUMERIC = (Integer, Float)
ORDERED = (Integer, Float, String)


def _trunc_div(a, b):
    """Integer division rounding toward zero."""
    quot = abs(a) // abs(b)
    return quot if (a < 0) == (b < 0) else -quot


def _trunc_mod(a, b):
    """Remainder of _trunc_div: takes the sign of the dividend."""
    return a - b * _trunc_div(a, b)


# symbol: (integer implementation, float implementation)
ARITHMETIC = {
    "+": (operator.add, operator.add),
    "-": (operator.sub, operator.sub),
    "*": (operator.mul, operator.mul),
    "/": (_trunc_div, operator.truediv),
    "%": (_trunc_mod, math.fmod),
}

COMPARISONS = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def shared_type(symbol, values, allowed, line=-1, col=-1):
    """Returns the one type shared by all of values. Raises TypeError if that type isn't in allowed or if values mix
    types.
    """
    first = values[0]
    if not isinstance(first, allowed):
        raise errors.TypeError(f"cannot apply {symbol} to type {first.type_name}", line, col)
    for val in values[1:]:
        if type(val) is not type(first):
            raise errors.TypeError(
                f"cannot apply {symbol} to type {first.type_name} with type {val.type_name}", line, col
            )
    return type(first)


def arithmetic(symbol, values, line=-1, col=-1):
    if symbol == "+" and isinstance(values[0], String):
        shared_type(symbol, values, (String,), line, col)
        return String("".join(val.val for val in values))

    kind = shared_type(symbol, values, NUMERIC, line, col)
    int_op, float_op = ARITHMETIC[symbol]

    result = values[0].val
    for val in values[1:]:
        if symbol in ("/", "%") and val.val == 0:
            raise errors.DivisionByZero(f"division by zero in {symbol}", line, col)
        if kind is Integer:
            result = wrap(int_op(result, val.val))
        else:
            result = float_op(result, val.val)
    return kind(result)


def equal(symbol, values, line=-1, col=-1):
    first, rest = values[0], values[1:]
    for val in rest:
        if isinstance(first, Unit) or isinstance(val, Unit):
            continue
        if type(val) is not type(first):
            raise errors.TypeError(f"cannot compare type {first.type_name} with type {val.type_name}", line, col)
    return Boolean(any(first == val for val in rest))


def compare(symbol, values, line=-1, col=-1):
    shared_type(symbol, values, ORDERED, line, col)
    op = COMPARISONS[symbol]
    first = values[0].val
    return Boolean(any(op(first, val.val) for val in values[1:]))


def logical(symbol, values, line=-1, col=-1):
    shared_type(symbol, values, (Boolean,), line, col)
    bools = [val.val for val in values]
    return Boolean(all(bools) if symbol == "&&" else any(bools))


def inverse(symbol, values, line=-1, col=-1):
    if len(values) != 1:
        raise errors.ArityError(f"expected exactly 1 operand for {symbol}, got {len(values)}", line, col)
    val = values[0]
    if not isinstance(val, Boolean):
        raise errors.TypeError(f"cannot apply {symbol} to type {val.type_name}", line, col)
    return Boolean(not val.val)


OPERATORS = {
    **{symbol: arithmetic for symbol in ARITHMETIC},
    **{symbol: compare for symbol in COMPARISONS},
    "==": equal,
    "&&": logical,
    "||": logical,
    "!": inverse,
}


def apply(symbol, values, line=-1, col=-1):
    """Applies the operator spelled symbol to the already-evaluated operands in values."""
    if symbol != "!" and len(values) < 2:
        raise errors.ArityError(f"expected at least 2 operands for {symbol}, got {len(values)}", line, col)
    return OPERATORS[symbol](symbol, values, line, col)
