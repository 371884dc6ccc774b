# ======================================================================
# Nullable  (value-or-absent scalar and its operator algebra)
# ======================================================================
"""
Nullable values and the null-propagation rules of every operator.

- A Nullable either holds a value or is absent (the ``Null`` singleton)
- Every operator is an ``Operator`` record applied through one of two
  generic routines, ``apply_unary`` and ``apply_binary``
- Absent operands yield ``Null`` for every operator except ``==`` / ``!=``,
  which always produce a plain bool
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
import operator

from .errors import PyColumnTypeError, PyColumnValueError


# Rendering of an absent value
NULL_TOKEN = "Null"

# Operator kinds
UNARY = "unary"
LOGICAL_NOT = "logical_not"
ARITHMETIC = "arithmetic"
ORDERING = "ordering"
EQUALITY = "equality"
LOGICAL = "logical"
BITWISE = "bitwise"

@dataclass(frozen=True)
class Operator:
    """
    One operator of the nullable algebra.

    Attributes
    ----------
    name : str
        Registry key (``"add"``, ``"logical_not"``, ...)
    symbol : str
        Symbol used in error messages
    func : Callable
        Total function over present values
    kind : str
        Operator category; decides how absence is treated
    """

    name: str
    symbol: str
    func: Callable[..., Any]
    kind: str

    @property
    def is_unary(self) -> bool:
        return self.kind in (UNARY, LOGICAL_NOT)

    @property
    def propagates_null(self) -> bool:
        return self.kind != EQUALITY


def _logical_and(a, b):
    return bool(a) and bool(b)


def _logical_or(a, b):
    return bool(a) or bool(b)


def _logical_not(a):
    return not a


OPERATORS = {op.name: op for op in (
    # unary
    Operator("pos", "+", operator.pos, UNARY),
    Operator("neg", "-", operator.neg, UNARY),
    Operator("invert", "~", operator.invert, UNARY),
    Operator("abs", "abs", abs, UNARY),
    Operator("logical_not", "not", _logical_not, LOGICAL_NOT),
    # arithmetic
    Operator("add", "+", operator.add, ARITHMETIC),
    Operator("sub", "-", operator.sub, ARITHMETIC),
    Operator("mul", "*", operator.mul, ARITHMETIC),
    Operator("truediv", "/", operator.truediv, ARITHMETIC),
    Operator("floordiv", "//", operator.floordiv, ARITHMETIC),
    Operator("mod", "%", operator.mod, ARITHMETIC),
    Operator("pow", "**", operator.pow, ARITHMETIC),
    # ordering
    Operator("lt", "<", operator.lt, ORDERING),
    Operator("le", "<=", operator.le, ORDERING),
    Operator("gt", ">", operator.gt, ORDERING),
    Operator("ge", ">=", operator.ge, ORDERING),
    # equality
    Operator("eq", "==", operator.eq, EQUALITY),
    Operator("ne", "!=", operator.ne, EQUALITY),
    # logical
    Operator("logical_and", "and", _logical_and, LOGICAL),
    Operator("logical_or", "or", _logical_or, LOGICAL),
    # bitwise
    Operator("and_", "&", operator.and_, BITWISE),
    Operator("or_", "|", operator.or_, BITWISE),
    Operator("xor", "^", operator.xor, BITWISE),
    Operator("lshift", "<<", operator.lshift, BITWISE),
    Operator("rshift", ">>", operator.rshift, BITWISE),
)}


def _is_column(x) -> bool:
    # column module imports this one
    from .column import PyColumn
    return isinstance(x, PyColumn)


def lift(x) -> "Nullable":
    """
    Read any operand as a Nullable.

    Nullables pass through, element references are read at call time,
    ``None`` is absence, anything else is a present value.
    """
    if isinstance(x, Nullable):
        return x
    if isinstance(x, NullableOps):
        return x.get()
    return Nullable(x)


def apply_unary(op: Operator, operand) -> "Nullable":
    """``op(Holds(v)) = Holds(op(v))``; ``op(Null) = Null``."""
    a = lift(operand)
    if not a._has_value:
        return Null
    try:
        result = op.func(a._value)
    except TypeError as e:
        raise PyColumnTypeError(
            f"Bad operand type for unary '{op.symbol}': '{type(a._value).__name__}'."
        ) from e
    if op.kind == LOGICAL_NOT:
        return Nullable(bool(result))
    return Nullable(result)


def apply_binary(op: Operator, lhs, rhs):
    """
    Apply a binary operator to two operands, either of which may be absent.

    Returns a Nullable for every operator kind except EQUALITY, which
    returns a plain bool: ``Null == Null`` is True and ``Null == value``
    is False in either order (``!=`` is the converse).
    """
    a = lift(lhs)
    b = lift(rhs)

    if not op.propagates_null:
        if a._has_value and b._has_value:
            return bool(op.func(a._value, b._value))
        both_null = not a._has_value and not b._has_value
        return both_null if op.name == "eq" else not both_null

    if not (a._has_value and b._has_value):
        return Null
    try:
        result = op.func(a._value, b._value)
    except TypeError as e:
        raise PyColumnTypeError(
            f"Unsupported operand type(s) for '{op.symbol}': "
            f"'{type(a._value).__name__}' and '{type(b._value).__name__}'."
        ) from e
    if op.kind in (ORDERING, LOGICAL):
        return Nullable(bool(result))
    return Nullable(result)


class NullableOps:
    """
    Operator surface shared by Nullable and ElementRef.

    Subclasses implement ``get()`` returning the current Nullable; every
    operator reads through it at evaluation time. Column operands are
    left to the column's own (broadcasting) implementation.
    """
    __slots__ = ()

    def get(self) -> "Nullable":
        raise NotImplementedError

    def has_value(self) -> bool:
        return self.get()._has_value

    def is_null(self) -> bool:
        return not self.get()._has_value

    def value(self):
        """Return the held value; raise PyColumnValueError when absent."""
        current = self.get()
        if not current._has_value:
            raise PyColumnValueError("Null has no value")
        return current._value

    def value_or(self, default):
        current = self.get()
        return current._value if current._has_value else default

    def map(self, func: Callable[[Any], Any]) -> "Nullable":
        """Apply func to the held value; Null stays Null."""
        name = getattr(func, "__name__", "map")
        return apply_unary(Operator(name, name, func, UNARY), self)

    def _binary(self, name, other):
        if _is_column(other):
            return NotImplemented
        return apply_binary(OPERATORS[name], self, other)

    def _rbinary(self, name, other):
        if _is_column(other):
            return NotImplemented
        return apply_binary(OPERATORS[name], other, self)

    # ------------------------------------------------------
    # Rendering
    # ------------------------------------------------------

    def __str__(self):
        current = self.get()
        if current._has_value:
            return str(current._value)
        return NULL_TOKEN

    def __format__(self, spec):
        current = self.get()
        if current._has_value:
            return format(current._value, spec)
        return format(NULL_TOKEN, spec) if spec else NULL_TOKEN

    def __bool__(self):
        current = self.get()
        if not current._has_value:
            raise PyColumnTypeError(
                "The truth value of Null is ambiguous. Use has_value() to test for absence."
            )
        return bool(current._value)

    # ------------------------------------------------------
    # Unary operators
    # ------------------------------------------------------

    def __pos__(self):
        return apply_unary(OPERATORS["pos"], self)

    def __neg__(self):
        return apply_unary(OPERATORS["neg"], self)

    def __invert__(self):
        return apply_unary(OPERATORS["invert"], self)

    def __abs__(self):
        return apply_unary(OPERATORS["abs"], self)

    def logical_not(self):
        return apply_unary(OPERATORS["logical_not"], self)

    # ------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------

    def __add__(self, other):
        return self._binary("add", other)

    def __radd__(self, other):
        return self._rbinary("add", other)

    def __sub__(self, other):
        return self._binary("sub", other)

    def __rsub__(self, other):
        return self._rbinary("sub", other)

    def __mul__(self, other):
        return self._binary("mul", other)

    def __rmul__(self, other):
        return self._rbinary("mul", other)

    def __truediv__(self, other):
        return self._binary("truediv", other)

    def __rtruediv__(self, other):
        return self._rbinary("truediv", other)

    def __floordiv__(self, other):
        return self._binary("floordiv", other)

    def __rfloordiv__(self, other):
        return self._rbinary("floordiv", other)

    def __mod__(self, other):
        return self._binary("mod", other)

    def __rmod__(self, other):
        return self._rbinary("mod", other)

    def __pow__(self, other):
        return self._binary("pow", other)

    def __rpow__(self, other):
        return self._rbinary("pow", other)

    # ------------------------------------------------------
    # Comparison
    # ------------------------------------------------------

    def __eq__(self, other):
        return self._binary("eq", other)

    def __ne__(self, other):
        return self._binary("ne", other)

    def __lt__(self, other):
        return self._binary("lt", other)

    def __le__(self, other):
        return self._binary("le", other)

    def __gt__(self, other):
        return self._binary("gt", other)

    def __ge__(self, other):
        return self._binary("ge", other)

    # ------------------------------------------------------
    # Logical (no dunder hooks exist for and / or)
    # ------------------------------------------------------

    def logical_and(self, other):
        return self._binary("logical_and", other)

    def logical_or(self, other):
        return self._binary("logical_or", other)

    # ------------------------------------------------------
    # Bitwise
    # ------------------------------------------------------

    def __and__(self, other):
        return self._binary("and_", other)

    def __rand__(self, other):
        return self._rbinary("and_", other)

    def __or__(self, other):
        return self._binary("or_", other)

    def __ror__(self, other):
        return self._rbinary("or_", other)

    def __xor__(self, other):
        return self._binary("xor", other)

    def __rxor__(self, other):
        return self._rbinary("xor", other)

    def __lshift__(self, other):
        return self._binary("lshift", other)

    def __rlshift__(self, other):
        return self._rbinary("lshift", other)

    def __rshift__(self, other):
        return self._binary("rshift", other)

    def __rrshift__(self, other):
        return self._rbinary("rshift", other)


class Nullable(NullableOps):
    """
    Immutable value-or-absent scalar.

    ``Nullable(v)`` holds ``v``; ``Nullable()`` and ``Nullable(None)`` are
    the ``Null`` singleton. Nesting is kept as-is:
    ``Nullable(Nullable(3))`` holds a Nullable. ``Nullable(col[i])`` is
    the slot's current value, not the live reference.

    Examples
    --------
    >>> Nullable(2) * 3
    Nullable(6)
    >>> Nullable(2) * Null
    Null
    >>> Null == Null
    True
    """
    __slots__ = ("_value", "_has_value")

    def __new__(cls, value=None):
        if isinstance(value, NullableOps) and not isinstance(value, Nullable):
            # element reference: take the slot as it is now
            return value.get()
        if value is None:
            return Null
        self = object.__new__(cls)
        self._value = value
        self._has_value = True
        return self

    def get(self) -> "Nullable":
        return self

    def __repr__(self):
        if self._has_value:
            return f"Nullable({self._value!r})"
        return NULL_TOKEN

    def __hash__(self):
        if self._has_value:
            return hash(self._value)
        # Null == None, so they must hash alike
        return hash(None)

    def __reduce__(self):
        if self._has_value:
            return (Nullable, (self._value,))
        return (Nullable, ())


# The absent value. Built directly since Nullable(None) resolves to it.
Null = object.__new__(Nullable)
Null._value = None
Null._has_value = False
