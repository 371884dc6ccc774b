"""Live reference to one slot of a PyColumn."""

from .nullable import NullableOps


class ElementRef(NullableOps):
	"""
	Handle on slot ``index`` of ``column``, created by ``column[index]``.

	Nothing is cached: every read goes through ``column.at(index)`` and
	every write through ``column.set`` / ``column.reset``, so the usual
	out-of-range rules apply (reads give Null, writes report False).
	The reference keeps its column alive but is not meant to be retained;
	after ``column.clear()`` it addresses a slot that no longer exists.

	Examples
	--------
	>>> col = PyColumn([1, 2, 3])
	>>> ref = col[0]
	>>> ref * 10
	Nullable(10)
	>>> ref.set(5)
	True
	>>> col.at(0)
	Nullable(5)
	"""
	__slots__ = ('_column', '_index')

	def __init__(self, column, index):
		self._column = column
		self._index = index

	@property
	def column(self):
		return self._column

	@property
	def index(self):
		return self._index

	def get(self):
		""" current slot value """
		return self._column.at(self._index)

	def set(self, value) -> bool:
		return self._column.set(self._index, value)

	def reset(self) -> bool:
		return self._column.reset(self._index)

	def __repr__(self):
		return f"ElementRef(index={self._index}, value={self.get()!r})"

	__hash__ = None
