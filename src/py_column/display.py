"""Display and repr logic for PyColumn."""

from __future__ import annotations
from datetime import date
from typing import List

from .nullable import NULL_TOKEN


# How many rows to show on each side of "..."
MAX_HEAD_ROWS = 5

_ELLIPSIS = object()


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _is_numeric(col) -> bool:
	dtype = col._dtype
	return dtype is not None and dtype.kind in (int, float)


def _format_slot(slot, kind) -> str:
	if not slot.has_value():
		return NULL_TOKEN
	v = slot.value()
	if kind is float and isinstance(v, float):
		return f"{v:.1f}" if v.is_integer() else f"{v:g}"
	if kind is date and isinstance(v, date):
		return v.isoformat()
	if kind is str and isinstance(v, str):
		return repr(v)
	return str(v)


def _format_column(col, max_preview: int = MAX_HEAD_ROWS) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	# Truncate with symmetric preview
	slots = col._slots
	if len(slots) > max_preview * 2:
		preview = list(slots[:max_preview]) + [_ELLIPSIS] + list(slots[-max_preview:])
	else:
		preview = list(slots)

	kind = col._dtype.kind if col._dtype is not None else None
	out = []
	for slot in preview:
		if slot is _ELLIPSIS:
			out.append('...')
		else:
			out.append(_format_slot(slot, kind))
	return out


def _footer(col) -> str:
	"""Generate footer line based on length and dtype."""
	if not len(col):
		return "# empty"
	dtype = col._dtype
	if dtype is None:
		dt = "object"
	elif dtype.nullable:
		dt = f"{dtype.kind.__name__} nullable"
	else:
		dt = dtype.kind.__name__
	return f"# {len(col)} element column <{dt}>"


def _repr_column(col) -> str:
	"""Pretty repr for a PyColumn."""
	formatted = _format_column(col)

	# Compute width: max of data and header (if present)
	data_width = max(len(s) for s in formatted) if formatted else 0
	header_width = 0
	if col._name:
		header_text = repr(col._name) if _needs_quoting(col._name) else col._name
		header_width = len(header_text)

	width = max(data_width, header_width)

	# Align: numeric right, others left
	numeric = _is_numeric(col)
	if numeric:
		formatted = [s.rjust(width) for s in formatted]
	else:
		formatted = [s.ljust(width) for s in formatted]

	lines = []

	# Optional column name
	if col._name:
		lines.append(header_text.rjust(width) if numeric else header_text.ljust(width))

	lines.extend(formatted)
	lines.append("")
	lines.append(_footer(col))
	return "\n".join(lines)


def _render(col) -> str:
	"""Plain rendering: one slot per line, each line newline-terminated."""
	return "".join(f"{slot}\n" for slot in col._slots)


def _printr(col) -> str:
	"""Entry point used by PyColumn.__repr__."""
	return _repr_column(col)
