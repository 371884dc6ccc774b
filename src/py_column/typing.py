"""
DataType system for PyColumn.

Pure metadata design:
  - DataType describes column semantics (element kind + nullable flag)
  - Absence lives in the Nullable slots, not in DataType
  - Promotion is functional (immutable DataType instances)
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional, Type
import warnings

from .errors import PyColumnTypeError


@dataclass(frozen=True)
class DataType:
    """
    Describes the element type of a PyColumn.

    Attributes
    ----------
    kind : Type
        Python type of the present values (int, float, str, date, etc.)
    nullable : bool
        Whether the column may hold Null slots

    Examples
    --------
    >>> DataType(int)
    <int>
    >>> DataType(int, nullable=True)
    <int nullable>
    >>> DataType(float).promote_with(None)
    <float nullable>
    """

    kind: Type[Any]
    nullable: bool = False

    def __repr__(self):
        if self.nullable:
            return f"<{self.kind.__name__} nullable>"
        return f"<{self.kind.__name__}>"

    @property
    def is_numeric(self) -> bool:
        """True if kind is bool, int, float, or complex."""
        try:
            return issubclass(self.kind, (int, float, complex, bool))
        except TypeError:
            return False

    @property
    def is_temporal(self) -> bool:
        """True if kind is date or datetime."""
        try:
            return issubclass(self.kind, (date, datetime))
        except TypeError:
            return False

    def with_nullable(self, nullable: bool = True) -> "DataType":
        if nullable == self.nullable:
            return self
        return DataType(self.kind, nullable)

    def promote_with(self, value: Any) -> "DataType":
        """
        Promote this DataType to accommodate a new Python value.

        Never mutates; always returns new DataType. ``None`` stands for an
        absent slot and only lifts nullability.
        """
        if value is None:
            return self.with_nullable(True)

        vtype = type(value)

        if vtype is self.kind:
            return self

        # Numeric ladder (bool -> int -> float -> complex)
        if self.is_numeric and isinstance(value, (int, float, complex, bool)):
            if self.kind is complex or vtype is complex:
                new_kind = complex
            elif self.kind is float or vtype is float:
                new_kind = float
            elif self.kind is int or vtype is int:
                new_kind = int
            else:
                new_kind = bool

            if new_kind != self.kind:
                return DataType(new_kind, self.nullable)
            return self

        # Temporal ladder (date -> datetime)
        if self.is_temporal and isinstance(value, (date, datetime)):
            if self.kind is datetime or vtype is datetime:
                new_kind = datetime
            else:
                new_kind = date

            if new_kind != self.kind:
                return DataType(new_kind, self.nullable)
            return self

        if self.kind is not object:
            warnings.warn(
                f"Degrading column<{self.kind.__name__}> to column<object> "
                f"due to incompatible value of type {vtype.__name__}",
                stacklevel=3,
            )
            return DataType(object, self.nullable)

        return self


def infer_kind(value: Any) -> Optional[Type]:
    """
    Infer Python type for a single scalar.

    Returns None for None values.
    """
    if value is None:
        return None

    # bool before int (bool is subclass of int)
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, complex):
        return complex
    if isinstance(value, str):
        return str
    if isinstance(value, bytes):
        return bytes

    # datetime before date (datetime is subclass of date)
    if isinstance(value, datetime):
        return datetime
    if isinstance(value, date):
        return date

    return object


def infer_dtype(values: Iterable[Any]) -> Optional[DataType]:
    """
    Infer a DataType from raw values, ``None`` marking absent slots.

    Returns None for an empty iterable.

    Examples
    --------
    >>> infer_dtype([1, 2, 3])
    <int>
    >>> infer_dtype([1, 2.5, 3])
    <float>
    >>> infer_dtype([1, None, 3])
    <int nullable>
    """
    dtype: Optional[DataType] = None
    seen_null = False

    for v in values:
        if dtype is None:
            k = infer_kind(v)
            if k is None:
                seen_null = True
                continue
            dtype = DataType(k, nullable=seen_null)
        else:
            dtype = dtype.promote_with(v)

    if dtype is None:
        # all slots absent
        return DataType(object, nullable=True) if seen_null else None

    return dtype


def as_dtype(dtype: Any) -> Optional[DataType]:
    """Accept a DataType, a Python type, or None."""
    if dtype is None or isinstance(dtype, DataType):
        return dtype
    if isinstance(dtype, type):
        return DataType(dtype)
    raise PyColumnTypeError(
        f"dtype must be a DataType instance or Python type, not {type(dtype).__name__}"
    )
