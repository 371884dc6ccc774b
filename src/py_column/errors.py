class PyColumnError(Exception):
    """Base exception for py-column library."""
    pass


class PyColumnTypeError(PyColumnError, TypeError):
    """Raised for invalid types in API calls or incompatible operands."""
    pass


class PyColumnValueError(PyColumnError, ValueError):
    """Raised for invalid values, e.g. reading the value of Null."""
    pass


class PyColumnIndexError(PyColumnError, IndexError):
    """Raised for invalid indexing operations."""
    pass


class PyColumnEmptyError(PyColumnIndexError):
    """Raised when front() or back() is called on an empty column."""
    pass
