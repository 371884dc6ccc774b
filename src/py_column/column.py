import operator
import sys
import warnings

from .display import _printr
from .display import _render
from .element_ref import ElementRef
from .errors import PyColumnEmptyError
from .errors import PyColumnTypeError
from .errors import PyColumnValueError
from .nullable import EQUALITY
from .nullable import LOGICAL
from .nullable import LOGICAL_NOT
from .nullable import OPERATORS
from .nullable import ORDERING
from .nullable import UNARY
from .nullable import Null
from .nullable import Nullable
from .nullable import Operator
from .nullable import apply_binary
from .nullable import apply_unary
from .nullable import lift
from .typing import DataType
from .typing import as_dtype
from .typing import infer_dtype


# ============================================================
# Small helpers
# ============================================================

def _is_sequence(x) -> bool:
    return hasattr(x, '__iter__') and not isinstance(x, (str, bytes, bytearray))


def _as_int(index) -> int:
    """Integer index or PyColumnTypeError. bool is not an index."""
    if isinstance(index, bool):
        raise PyColumnTypeError('Column indices must be integers, not bool')
    try:
        return operator.index(index)
    except TypeError:
        raise PyColumnTypeError(
            f'Column indices must be integers or slices, not {type(index).__name__}'
        ) from None


_BOOL_KINDS = (ORDERING, EQUALITY, LOGICAL, LOGICAL_NOT)


# ============================================================
# Main backend
# ============================================================

class PyColumn():
	"""
	Ordered column of nullable slots.

	Out-of-range reads give Null and out-of-range writes return False;
	binary operators broadcast scalars and null-pad the shorter of two
	columns. Derived columns are always new objects.

	Not thread-safe: writers (set, reset, fill, clear, item assignment)
	need exclusive access, readers may share.
	"""
	_dtype = None  # DataType instance (private)
	_slots = None
	_name = None
	_reserved = 0

	def __init__(self, initial=(), dtype=None, name=None):
		"""
		Build a column from raw values.

		Each value becomes a present slot; ``None`` and ``Null`` become
		absent slots and Nullable elements are taken as slots unchanged.
		"""
		self._name = name
		self._slots = [lift(x) for x in initial]
		self._reserved = len(self._slots)

		dtype = as_dtype(dtype)
		if dtype is None:
			if self._slots:
				dtype = infer_dtype(s.value_or(None) for s in self._slots)
		elif any(s.is_null() for s in self._slots):
			dtype = dtype.with_nullable(True)
		self._dtype = dtype

	@classmethod
	def from_nullable(cls, slots, dtype=None, name=None):
		""" build from a sequence of already-nullable values """
		slots = list(slots)
		for i, slot in enumerate(slots):
			if not isinstance(slot, Nullable):
				raise PyColumnTypeError(
					f"from_nullable expects Nullable elements; got {type(slot).__name__} at index {i}"
				)
		return cls(slots, dtype=dtype, name=name)

	@classmethod
	def new(cls, value, length, name=None):
		""" create a new column of length * value """
		return cls([value] * _as_int(length), name=name)

	def schema(self):
		"""Get the DataType schema of this column."""
		return self._dtype

	@property
	def name(self):
		return self._name

	def rename(self, new_name):
		"""Rename this column (returns self for chaining)"""
		self._name = new_name
		return self

	def copy(self, new_slots=None, name=...):
		# Use sentinel value (...) to distinguish between name=None (clear) and not passing name (preserve)
		use_name = self._name if name is ... else name
		return PyColumn.from_nullable(
			self._slots if new_slots is None else new_slots,
			dtype=self._dtype,
			name=use_name)

	def __repr__(self):
		return _printr(self)

	def __str__(self):
		return _render(self)

	def __iter__(self):
		""" iterate over the Nullable slots """
		return iter(self._slots)

	def __len__(self):
		return len(self._slots)

	def values(self):
		""" raw values, None for absent slots """
		return [s.value_or(None) for s in self._slots]

	def isna(self):
		""" boolean column, True where the slot is Null """
		return PyColumn([s.is_null() for s in self._slots], dtype=DataType(bool))

	def notna(self):
		return PyColumn([s.has_value() for s in self._slots], dtype=DataType(bool))

	#-----------------------------------------------------
	# Element access
	#-----------------------------------------------------

	def _valid_index(self, index):
		"""Index as int when it addresses a slot, else None."""
		index = _as_int(index)
		if 0 <= index < len(self._slots):
			return index
		return None

	def at(self, index):
		"""
		Slot at index, or Null when index is out of range.

		Negative indices are out of range; there is no wraparound.
		"""
		i = self._valid_index(index)
		if i is None:
			return Null
		return self._slots[i]

	def front(self):
		if not self._slots:
			raise PyColumnEmptyError("front() called on an empty column")
		return self._slots[0]

	def back(self):
		if not self._slots:
			raise PyColumnEmptyError("back() called on an empty column")
		return self._slots[-1]

	def __getitem__(self, key):
		""" Get a reference or a sub-column:
			# Int: ElementRef bound to (self, key); bounds are checked on use
			# Slice: new PyColumn of the sliced slots
		"""
		if isinstance(key, slice):
			return self.copy(self._slots[key])
		return ElementRef(self, _as_int(key))

	#-----------------------------------------------------
	# Capacity
	#-----------------------------------------------------

	def empty(self):
		return not self._slots

	def size(self):
		return len(self._slots)

	def max_size(self):
		return sys.maxsize

	def capacity(self):
		return max(self._reserved, len(self._slots))

	def reserve(self, new_cap):
		""" raise capacity to at least new_cap; size and content are unchanged """
		new_cap = _as_int(new_cap)
		if new_cap > self._reserved:
			self._reserved = new_cap

	def shrink_to_fit(self):
		self._reserved = len(self._slots)

	def clear(self):
		""" remove every slot; capacity is kept """
		self._reserved = self.capacity()
		self._slots.clear()

	#-----------------------------------------------------
	# Mutation
	#-----------------------------------------------------

	def _note_write(self, slot):
		raw = slot.value_or(None)
		if self._dtype is None:
			self._dtype = infer_dtype([raw])
		else:
			self._dtype = self._dtype.promote_with(raw)

	def set(self, index, value):
		"""
		Overwrite slot index with value (None or Null makes it absent).

		Returns True on success; False, with the column unchanged, when
		index is out of range.
		"""
		i = self._valid_index(index)
		if i is None:
			return False
		slot = lift(value)
		self._slots[i] = slot
		self._note_write(slot)
		return True

	def reset(self, index):
		""" make slot index absent; False when index is out of range """
		return self.set(index, Null)

	def fill(self, value):
		"""
		Broadcast assignment: every existing slot becomes value (or Null).

		Size is unchanged. Returns self.
		"""
		slot = lift(value)
		self._slots[:] = [slot] * len(self._slots)
		if self._slots:
			self._note_write(slot)
		return self

	def __setitem__(self, key, value):
		"""
		In-place assignment for:
		- integer indices (delegates to set)
		- slices (scalar broadcast, or an iterable of matching length)
		"""
		if isinstance(key, slice):
			targets = range(*key.indices(len(self._slots)))
			# read every value before the first write; refs may point into this column
			if _is_sequence(value):
				value = [lift(v) for v in value]
				if len(value) != len(targets):
					raise PyColumnValueError("Slice length and value length must match.")
			else:
				# repeat the scalar
				value = [lift(value)] * len(targets)
			for i, v in zip(targets, value):
				self.set(i, v)
			return

		if not self.set(key, value):
			warnings.warn(
				f"Index {key} out of range for column of length {len(self)}; assignment ignored.",
				stacklevel=2
			)

	#-----------------------------------------------------
	# Operators
	#-----------------------------------------------------

	def _derive(self, results, dtype=None):
		results = [lift(r) for r in results]
		if dtype is None and results and all(r.is_null() for r in results) and self._dtype is not None:
			dtype = self._dtype.with_nullable(True)
		return PyColumn(results, dtype=dtype)

	def _unary_operation(self, op):
		"""Apply a unary operator to each slot."""
		if op.kind == LOGICAL_NOT:
			dtype = DataType(bool)
		elif not self._slots:
			dtype = self._dtype
		else:
			dtype = None
		out = self._derive((apply_unary(op, s) for s in self._slots), dtype)
		out._name = self._name
		return out

	def _elementwise_operation(self, other, op, reflected=False):
		"""
		Apply a binary operator slot by slot.

		Columns (and other non-string iterables, read as columns) are combined
		position by position up to the longer length; the shorter side
		contributes Null past its end. Anything else is broadcast. Wrap an
		iterable value in Nullable to broadcast it.
		"""
		dtype = DataType(bool) if op.kind in _BOOL_KINDS else None

		if isinstance(other, PyColumn) or _is_sequence(other):
			if not isinstance(other, PyColumn):
				other = PyColumn(other)
			lhs, rhs = (other, self) if reflected else (self, other)
			n = max(len(lhs), len(rhs))
			return self._derive((apply_binary(op, lhs.at(i), rhs.at(i)) for i in range(n)), dtype)

		# read once, so an ElementRef operand is evaluated now
		scalar = lift(other)
		if reflected:
			results = (apply_binary(op, scalar, s) for s in self._slots)
		else:
			results = (apply_binary(op, s, scalar) for s in self._slots)
		return self._derive(results, dtype)

	def map(self, func):
		"""Apply func to every present value; Null slots stay Null."""
		name = getattr(func, "__name__", "map")
		return self._unary_operation(Operator(name, name, func, UNARY))

	def __pos__(self):
		return self._unary_operation(OPERATORS['pos'])

	def __neg__(self):
		return self._unary_operation(OPERATORS['neg'])

	def __invert__(self):
		return self._unary_operation(OPERATORS['invert'])

	def __abs__(self):
		return self._unary_operation(OPERATORS['abs'])

	def logical_not(self):
		return self._unary_operation(OPERATORS['logical_not'])

	""" Math operations """
	def __add__(self, other):
		return self._elementwise_operation(other, OPERATORS['add'])

	def __radd__(self, other):
		return self._elementwise_operation(other, OPERATORS['add'], reflected=True)

	def __sub__(self, other):
		return self._elementwise_operation(other, OPERATORS['sub'])

	def __rsub__(self, other):
		return self._elementwise_operation(other, OPERATORS['sub'], reflected=True)

	def __mul__(self, other):
		return self._elementwise_operation(other, OPERATORS['mul'])

	def __rmul__(self, other):
		return self._elementwise_operation(other, OPERATORS['mul'], reflected=True)

	def __truediv__(self, other):
		return self._elementwise_operation(other, OPERATORS['truediv'])

	def __rtruediv__(self, other):
		return self._elementwise_operation(other, OPERATORS['truediv'], reflected=True)

	def __floordiv__(self, other):
		return self._elementwise_operation(other, OPERATORS['floordiv'])

	def __rfloordiv__(self, other):
		return self._elementwise_operation(other, OPERATORS['floordiv'], reflected=True)

	def __mod__(self, other):
		return self._elementwise_operation(other, OPERATORS['mod'])

	def __rmod__(self, other):
		return self._elementwise_operation(other, OPERATORS['mod'], reflected=True)

	def __pow__(self, other):
		return self._elementwise_operation(other, OPERATORS['pow'])

	def __rpow__(self, other):
		return self._elementwise_operation(other, OPERATORS['pow'], reflected=True)

	""" Comparison Operators
		# __eq__ ==
		# __ne__ !=
		# __ge__ >=
		# __gt__ >
		# __lt__ <
		# __le__ <=
	"""
	def __eq__(self, other):
		return self._elementwise_operation(other, OPERATORS['eq'])

	def __ne__(self, other):
		return self._elementwise_operation(other, OPERATORS['ne'])

	def __ge__(self, other):
		return self._elementwise_operation(other, OPERATORS['ge'])

	def __gt__(self, other):
		return self._elementwise_operation(other, OPERATORS['gt'])

	def __le__(self, other):
		return self._elementwise_operation(other, OPERATORS['le'])

	def __lt__(self, other):
		return self._elementwise_operation(other, OPERATORS['lt'])

	__hash__ = None

	""" Logical and bitwise operations """
	def logical_and(self, other):
		return self._elementwise_operation(other, OPERATORS['logical_and'])

	def logical_or(self, other):
		return self._elementwise_operation(other, OPERATORS['logical_or'])

	def __and__(self, other):
		return self._elementwise_operation(other, OPERATORS['and_'])

	def __rand__(self, other):
		return self._elementwise_operation(other, OPERATORS['and_'], reflected=True)

	def __or__(self, other):
		return self._elementwise_operation(other, OPERATORS['or_'])

	def __ror__(self, other):
		return self._elementwise_operation(other, OPERATORS['or_'], reflected=True)

	def __xor__(self, other):
		return self._elementwise_operation(other, OPERATORS['xor'])

	def __rxor__(self, other):
		return self._elementwise_operation(other, OPERATORS['xor'], reflected=True)

	def __lshift__(self, other):
		return self._elementwise_operation(other, OPERATORS['lshift'])

	def __rlshift__(self, other):
		return self._elementwise_operation(other, OPERATORS['lshift'], reflected=True)

	def __rshift__(self, other):
		return self._elementwise_operation(other, OPERATORS['rshift'])

	def __rrshift__(self, other):
		return self._elementwise_operation(other, OPERATORS['rshift'], reflected=True)

	def __bool__(self):
		"""
		Standard Python truthiness: returns True if the column is not empty.

		Note: Emits a warning for bool columns, since 'if col' is often
		meant as an element-wise check.
		"""
		is_non_empty = bool(self._slots)

		if is_non_empty and self._dtype is not None and self._dtype.kind is bool:
			warnings.warn(
				"PyColumn is being used in a boolean context (e.g., 'if column:'). "
				"This checks for emptiness (len > 0), not element-wise truth.",
				stacklevel=2
			)

		return is_non_empty
