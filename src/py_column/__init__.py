"""
py-column: a Pythonic, zero-dependency nullable column library

A column is an ordered sequence of slots that each either hold a value or
are absent (Null). Absence is part of the algebra: operators propagate it
instead of raising, and reads past the end of a column give Null.

Main classes:
    - Nullable: value-or-absent scalar (``Null`` is the absent value)
    - PyColumn: 1D column of Nullable slots with broadcasting operators
    - ElementRef: live handle on one slot, returned by ``column[i]``

Zero external dependencies - pure Python stdlib only.
"""

from .nullable import Nullable, Null, NULL_TOKEN, Operator, OPERATORS, apply_unary, apply_binary
from .column import PyColumn
from .element_ref import ElementRef
from .typing import DataType
from .errors import PyColumnError, PyColumnTypeError, PyColumnValueError, PyColumnIndexError, PyColumnEmptyError

__version__ = "0.1.0"
__all__ = [
	"PyColumn",
	"Nullable",
	"Null",
	"NULL_TOKEN",
	"ElementRef",
	"DataType",
	"Operator",
	"OPERATORS",
	"apply_unary",
	"apply_binary",
	"PyColumnError",
	"PyColumnTypeError",
	"PyColumnValueError",
	"PyColumnIndexError",
	"PyColumnEmptyError"
]
