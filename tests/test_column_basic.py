"""Basic PyColumn operations - creation, access, capacity, mutation"""
import pytest
from py_column import PyColumn, Nullable, Null, ElementRef
from py_column.errors import PyColumnEmptyError, PyColumnTypeError, PyColumnValueError


class TestCreation:
    """Test basic column creation"""

    @pytest.mark.parametrize("initial,expected_len,expected_kind", [
        ([1, 2, 3], 3, int),
        ([1.5, 2.5, 3.5], 3, float),
        (['a', 'b', 'c'], 3, str),
        ([1], 1, int),
    ])
    def test_creation_from_list(self, initial, expected_len, expected_kind):
        c = PyColumn(initial)
        assert len(c) == expected_len
        assert c.size() == expected_len
        assert c.schema().kind == expected_kind
        assert not c.schema().nullable
        assert c.values() == initial

    def test_creation_empty(self):
        c = PyColumn()
        assert len(c) == 0
        assert c.empty()
        assert c.schema() is None

    def test_none_becomes_null(self):
        c = PyColumn([1, None, 3])
        assert c.at(1) is Null
        assert c.schema().kind == int
        assert c.schema().nullable

    def test_creation_from_generator(self):
        c = PyColumn(x * 2 for x in range(3))
        assert c.values() == [0, 2, 4]

    def test_creation_from_nullables(self):
        c = PyColumn.from_nullable([Nullable(1), Null, Nullable(3)])
        assert c.values() == [1, None, 3]

    def test_from_nullable_rejects_raw_values(self):
        with pytest.raises(PyColumnTypeError, match="index 1"):
            PyColumn.from_nullable([Nullable(1), 2])

    def test_nested_nullable_slots(self):
        c = PyColumn.from_nullable([Nullable(Nullable(3)), Nullable(Null)])
        assert c.at(0).value().value() == 3
        assert c.at(1).has_value()
        assert c.at(1).value() is Null

    def test_new(self):
        c = PyColumn.new(0, 3)
        assert c.values() == [0, 0, 0]
        assert len(PyColumn.new(1, 0)) == 0

    def test_creation_with_name(self):
        c = PyColumn([1, 2, 3], name='price')
        assert c.name == 'price'
        assert c.rename('cost') is c
        assert c.name == 'cost'

    def test_creation_with_dtype(self):
        c = PyColumn([1, None], dtype=float)
        assert c.schema().kind == float
        assert c.schema().nullable

    def test_creation_from_column_copies(self):
        a = PyColumn([1, 2])
        b = PyColumn(a)
        b.set(0, 9)
        assert a.values() == [1, 2]


class TestAccess:
    """Test bounds-safe reads"""

    def test_at_in_range(self):
        c = PyColumn([10, 20, 30])
        assert c.at(0).value() == 10
        assert c.at(2).value() == 30

    @pytest.mark.parametrize("index", [3, 10, -1, -4])
    def test_at_out_of_range_is_null(self, index):
        c = PyColumn([10, 20, 30])
        assert c.at(index) is Null

    def test_at_on_empty(self):
        assert PyColumn().at(0) is Null

    @pytest.mark.parametrize("index", ["a", 1.5, None, True])
    def test_at_rejects_non_integer(self, index):
        with pytest.raises(PyColumnTypeError):
            PyColumn([1]).at(index)

    def test_front_back(self):
        c = PyColumn([1, 2, 3])
        assert c.front().value() == 1
        assert c.back().value() == 3

    def test_front_back_may_be_null(self):
        c = PyColumn([None, 1, None])
        assert c.front() is Null
        assert c.back() is Null

    def test_front_back_on_empty_raise(self):
        c = PyColumn()
        with pytest.raises(PyColumnEmptyError):
            c.front()
        with pytest.raises(IndexError):
            c.back()

    def test_getitem_returns_reference(self):
        c = PyColumn([1, 2, 3])
        ref = c[1]
        assert isinstance(ref, ElementRef)
        assert ref.column is c
        assert ref.index == 1

    def test_getitem_does_not_bounds_check(self):
        ref = PyColumn([1])[5]
        assert ref.get() is Null

    def test_getitem_slice(self):
        c = PyColumn([1, 2, 3], name='x')
        s = c[1:]
        assert isinstance(s, PyColumn)
        assert s.values() == [2, 3]
        assert s.name == 'x'
        s.set(0, 99)
        assert c.values() == [1, 2, 3]

    def test_iteration_yields_slots(self):
        c = PyColumn([1, None])
        assert list(c) == [Nullable(1), Null]

    def test_isna_notna(self):
        c = PyColumn([1, None, 3])
        assert c.isna().values() == [False, True, False]
        assert c.notna().values() == [True, False, True]
        assert c.isna().schema().kind is bool


class TestCapacity:
    """Test capacity and introspection"""

    def test_reserve_does_not_change_content(self):
        c = PyColumn([1, 2, 3])
        assert c.capacity() >= 3
        c.reserve(10)
        assert c.capacity() == 10
        assert c.size() == 3
        assert c.values() == [1, 2, 3]

    def test_reserve_never_shrinks(self):
        c = PyColumn([1, 2, 3])
        c.reserve(1)
        assert c.capacity() == 3

    def test_shrink_to_fit(self):
        c = PyColumn([1, 2, 3])
        c.reserve(10)
        c.shrink_to_fit()
        assert c.capacity() == 3
        assert c.values() == [1, 2, 3]

    def test_max_size(self):
        c = PyColumn([1, 2, 3])
        assert c.max_size() >= c.size()

    def test_clear(self):
        c = PyColumn([1, 2, 3])
        c.clear()
        assert c.size() == 0
        assert c.empty()
        assert c.capacity() == 3
        assert c.at(0) is Null


class TestSetReset:
    """Test in-place slot writes"""

    def test_set_round_trip(self):
        c = PyColumn([1, 2, 3])
        assert c.set(1, 20) is True
        assert c.at(1).value() == 20

    def test_set_out_of_range(self):
        c = PyColumn([1, 2, 3])
        before = str(c)
        assert c.set(10, 99) is False
        assert c.values() == [1, 2, 3]
        assert str(c) == before
        assert c.at(10) is Null

    def test_set_negative_index_fails(self):
        c = PyColumn([1, 2, 3])
        assert c.set(-1, 99) is False
        assert c.values() == [1, 2, 3]

    def test_reset_round_trip(self):
        c = PyColumn([7])
        assert c.reset(0) is True
        assert c.at(0) is Null

    def test_reset_out_of_range(self):
        c = PyColumn([7])
        assert c.reset(1) is False
        assert c.values() == [7]

    @pytest.mark.parametrize("absent", [None, Null])
    def test_set_null(self, absent):
        c = PyColumn([1, 2])
        assert c.set(0, absent) is True
        assert c.at(0) is Null

    def test_slot_transitions(self):
        c = PyColumn([1])
        c.reset(0)
        assert c.at(0) is Null
        c.set(0, 2)
        assert c.at(0).value() == 2
        c.set(0, 3)
        assert c.at(0).value() == 3

    def test_set_promotes_schema(self):
        c = PyColumn([1, 2])
        c.set(0, 1.5)
        assert c.schema().kind == float
        c.reset(1)
        assert c.schema().nullable

    def test_set_on_empty_column_fails(self):
        c = PyColumn()
        assert c.set(0, 1) is False
        assert c.reset(0) is False


class TestFill:
    """Test whole-column broadcast assignment"""

    def test_fill_value(self):
        c = PyColumn([1, 2, 3])
        assert c.fill(0) is c
        assert c.values() == [0, 0, 0]
        assert len(c) == 3

    @pytest.mark.parametrize("absent", [None, Null])
    def test_fill_null(self, absent):
        c = PyColumn([1, 2, 3]).fill(absent)
        assert all(slot is Null for slot in c)
        assert len(c) == 3

    def test_fill_empty_stays_empty(self):
        c = PyColumn().fill(5)
        assert len(c) == 0

    def test_fill_then_write_one_slot(self):
        c = PyColumn([1, 2, 3]).fill(0)
        c.set(1, 5)
        assert c.values() == [0, 5, 0]


class TestItemAssignment:
    """Test col[i] = value and slice assignment"""

    def test_setitem(self):
        c = PyColumn([1, 2, 3])
        c[0] = 100
        assert c.at(0).value() == 100

    @pytest.mark.parametrize("absent", [None, Null])
    def test_setitem_null(self, absent):
        c = PyColumn([1, 2, 3])
        c[1] = absent
        assert c.at(1) is Null

    def test_setitem_out_of_range_warns(self):
        c = PyColumn([1, 2, 3])
        with pytest.warns(UserWarning, match="out of range"):
            c[10] = 5
        assert c.values() == [1, 2, 3]

    def test_setitem_augmented(self):
        c = PyColumn([1, 2, 3])
        c[0] += 10
        assert c.values() == [11, 2, 3]

    def test_setitem_from_other_slot(self):
        c = PyColumn([1, 2, 3])
        c[0] = c[2]
        assert c.values() == [3, 2, 3]

    def test_slice_broadcast(self):
        c = PyColumn([1, 2, 3])
        c[:] = 7
        assert c.values() == [7, 7, 7]

    def test_slice_sequence(self):
        c = PyColumn([1, 2, 3])
        c[0:2] = [8, None]
        assert c.values() == [8, None, 3]

    def test_slice_length_mismatch(self):
        c = PyColumn([1, 2, 3])
        with pytest.raises(PyColumnValueError):
            c[0:2] = [1]

    def test_slice_swap_through_refs(self):
        c = PyColumn([1, 2])
        c[0:2] = [c[1], c[0]]
        assert c.values() == [2, 1]

    def test_slice_from_own_column(self):
        c = PyColumn([1, 2, 3])
        c[1:3] = c[0:2]
        assert c.values() == [1, 1, 2]

    def test_slice_broadcast_ref_read_once(self):
        c = PyColumn([1, 2, 3])
        c[:] = c[2]
        assert c.values() == [3, 3, 3]


class TestCopy:
    """Test copy behavior"""

    def test_copy_independence(self):
        c1 = PyColumn([1, 2, 3], name='a')
        c2 = c1.copy()
        c2.set(0, 999)
        assert c1.values() == [1, 2, 3]
        assert c2.values() == [999, 2, 3]
        assert c2.name == 'a'

    def test_copy_with_name(self):
        c = PyColumn([1], name='a').copy(name=None)
        assert c.name is None


class TestBooleanBehavior:
    """Test truthiness and hashing of columns"""

    def test_empty_column_is_falsy(self):
        assert not PyColumn()

    def test_nonempty_column_is_truthy(self):
        assert PyColumn([0])

    def test_bool_column_warns(self):
        with pytest.warns(UserWarning):
            bool(PyColumn([True, False]))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(PyColumn([1]))
