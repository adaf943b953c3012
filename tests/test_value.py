# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for CfgValue."""

import datetime
import math
import random

import pytest

from genro_cfgmap import CfgValue, ConfigMap, IsInt, IsMap, ValueKind
from genro_cfgmap.value import INT_MAX, INT_MIN


ALL_KINDS_SAMPLES = [
    CfgValue.of(5),
    CfgValue.of(1.5),
    CfgValue.of('text'),
    CfgValue.of(True),
    CfgValue.of({'a': 1}),
    CfgValue.of([1, 2]),
    CfgValue.from_datetime(datetime.date(2020, 2, 29)),
    CfgValue.null(),
    CfgValue.bad_value(),
    CfgValue.alias(3),
]

TYPE_TESTS = [
    'is_int', 'is_float', 'is_str', 'is_bool', 'is_map', 'is_list',
    'is_datetime', 'is_null', 'is_bad_value', 'is_alias',
]


class TestCfgValueConversion:
    """Tests for CfgValue.of and the named constructors."""

    def test_of_scalars(self):
        """Test scalar Python objects map to one kind each."""
        assert CfgValue.of(5).kind is ValueKind.INT
        assert CfgValue.of(1.5).kind is ValueKind.FLOAT
        assert CfgValue.of('x').kind is ValueKind.STR
        assert CfgValue.of(False).kind is ValueKind.BOOL
        assert CfgValue.of(None).kind is ValueKind.NULL

    def test_of_bool_is_not_int(self):
        """Test bools become BOOL even though bool subclasses int."""
        value = CfgValue.of(True)
        assert value.is_bool()
        assert not value.is_int()

    def test_of_list_converts_elements(self):
        """Test lists and tuples convert element by element."""
        value = CfgValue.of((1, 'two', [3.0]))
        assert value.is_list()
        items = value.as_list()
        assert items[0] == CfgValue.of(1)
        assert items[1] == CfgValue.of('two')
        assert items[2].as_list() == [CfgValue.of(3.0)]

    def test_of_dict_builds_map(self):
        """Test nested dicts become nested ConfigMaps."""
        value = CfgValue.of({'db': {'port': 5432}})
        assert isinstance(value.as_map(), ConfigMap)
        assert value.get('db/port') == CfgValue.of(5432)

    def test_of_returns_cfgvalue_unchanged(self):
        """Test an existing CfgValue is passed through."""
        value = CfgValue.of(5)
        assert CfgValue.of(value) is value

    def test_of_datetime(self):
        """Test dates and times become DATETIME."""
        moment = datetime.datetime(2020, 2, 29, 12, 30)
        assert CfgValue.of(moment).as_datetime() == moment
        assert CfgValue.of(datetime.time(8, 0)).is_datetime()

    def test_of_unsupported_type_raises(self):
        """Test objects with no counterpart raise TypeError."""
        with pytest.raises(TypeError, match="Cannot convert"):
            CfgValue.of(object())

    def test_of_int_out_of_range_raises(self):
        """Test ints outside 64 bits raise OverflowError."""
        assert CfgValue.of(INT_MAX).as_int() == INT_MAX
        assert CfgValue.of(INT_MIN).as_int() == INT_MIN
        with pytest.raises(OverflowError):
            CfgValue.of(INT_MAX + 1)

    def test_constructor_validates_payload(self):
        """Test an explicit kind rejects a mismatched payload."""
        with pytest.raises(TypeError, match="Invalid payload"):
            CfgValue(ValueKind.INT, 'five')
        with pytest.raises(TypeError):
            CfgValue(ValueKind.NULL, 0)
        with pytest.raises(TypeError):
            CfgValue.alias(-1)

    def test_list_items_are_copied(self):
        """Test CfgValue items of a list are copied, not shared."""
        item = CfgValue.of({'a': 1})
        value = CfgValue.of([item, item])
        first, second = value.as_list()
        assert first == second == item
        assert first is not item
        assert first.as_map() is not second.as_map()

    def test_clone_is_deep(self):
        """Test clone rebuilds nested maps and lists."""
        value = CfgValue.of({'a': [{'b': 1}]})
        copied = value.clone()
        assert copied == value
        copied.get('a/0').as_map_mut().add('c', 2)
        assert value.get('a/0/c') is None

    def test_detached_copies_existing_nodes(self):
        """Test detached copies CfgValues and ConfigMaps."""
        value = CfgValue.of(5)
        assert CfgValue.detached(value) == value
        assert CfgValue.detached(value) is not value
        source = ConfigMap({'a': 1}, default_path='a/')
        wrapped = CfgValue.detached(source)
        assert wrapped.as_map() == source
        assert wrapped.as_map() is not source

    def test_float_kind_accepts_int_payload(self):
        """Test an int payload is widened for FLOAT."""
        value = CfgValue(ValueKind.FLOAT, 2)
        assert value.as_float() == 2.0
        assert isinstance(value.as_float(), float)

    def test_repr(self):
        """Test string representation."""
        assert repr(CfgValue.of(5)) == 'Int(5)'
        assert repr(CfgValue.of('a')) == "Str('a')"
        assert repr(CfgValue.null()) == 'Null'
        assert repr(CfgValue.bad_value()) == 'BadValue'

    def test_equality(self):
        """Test equality requires the same kind and payload."""
        assert CfgValue.of(1) == CfgValue.of(1)
        assert CfgValue.of(1) != CfgValue.of(1.0)
        assert CfgValue.of(1) != CfgValue.of(True)
        assert CfgValue.of([1, {'a': 2}]) == CfgValue.of([1, {'a': 2}])


class TestCfgValueTypeTests:
    """Tests for is_X and as_X."""

    @pytest.mark.parametrize('value', ALL_KINDS_SAMPLES, ids=repr)
    def test_exactly_one_type_test_holds(self, value):
        """Test type tests are mutually exclusive and total."""
        results = [getattr(value, name)() for name in TYPE_TESTS]
        assert results.count(True) == 1

    def test_as_accessors(self):
        """Test as_X returns the payload only for the matching kind."""
        value = CfgValue.of(5)
        assert value.as_int() == 5
        assert value.as_float() is None
        assert value.as_str() is None
        assert value.as_bool() is None
        assert value.as_map() is None
        assert value.as_list() is None
        assert value.as_datetime() is None
        assert value.as_alias() is None
        assert CfgValue.alias(7).as_alias() == 7

    def test_as_list_mut_is_live(self):
        """Test mutating the list payload mutates the value."""
        value = CfgValue.of([1])
        value.as_list_mut().append(CfgValue.of(2))
        assert value == CfgValue.of([1, 2])

    def test_as_map_mut_is_live(self):
        """Test mutating the map payload mutates the value."""
        value = CfgValue.of({})
        value.as_map_mut().add('key', 'v')
        assert value.get('key') == CfgValue.of('v')


class TestCfgValueCoercion:
    """Tests for to_int, to_float and as_python."""

    def test_to_int(self):
        """Test to_int on INT, FLOAT and other kinds."""
        assert CfgValue.of(7).to_int() == 7
        assert CfgValue.of(2.9).to_int() == 2
        assert CfgValue.of(-2.9).to_int() == -2
        assert CfgValue.of('7').to_int() is None
        assert CfgValue.of(True).to_int() is None

    def test_to_int_saturates(self):
        """Test non-finite and huge floats stay in the 64-bit range."""
        assert CfgValue.of(math.nan).to_int() == 0
        assert CfgValue.of(math.inf).to_int() == INT_MAX
        assert CfgValue.of(-math.inf).to_int() == INT_MIN
        assert CfgValue.of(1e300).to_int() == INT_MAX

    def test_to_float(self):
        """Test to_float on FLOAT, INT and other kinds."""
        assert CfgValue.of(1.25).to_float() == 1.25
        assert CfgValue.of(3).to_float() == 3.0
        assert CfgValue.of([1]).to_float() is None

    def test_as_python(self):
        """Test recursive conversion back to plain objects."""
        source = {'a': [1, 2.5, 'x', None], 'b': {'c': True}}
        assert CfgValue.of(source).as_python() == source


class TestCfgValueNavigation:
    """Tests for get/get_mut on values and check_that."""

    def test_get_on_map_value(self):
        """Test get delegates to the map payload."""
        value = CfgValue.of({'a': {'b': 1}})
        assert value.get('a/b') == CfgValue.of(1)
        assert value.get_mut('a') is value.get('a')

    def test_get_on_scalar_is_none(self):
        """Test get on a non-map value gives None."""
        assert CfgValue.of(1).get('a') is None
        assert CfgValue.of([1]).get_mut('0') is None

    def test_check_that(self):
        """Test check_that delegates to the condition."""
        assert CfgValue.of(1).check_that(IsInt())
        assert not CfgValue.of(1).check_that(IsMap())


class TestCfgValueGenerators:
    """Tests for generate_int and generate_float."""

    def test_generate_int_literal(self):
        """Test an INT generates itself."""
        assert CfgValue.of(4).generate_int() == 4

    def test_generate_int_single_element(self):
        """Test a one-element list generates its element."""
        assert CfgValue.of([9]).generate_int() == 9

    def test_generate_int_range(self):
        """Test a two-element list generates within [min, max)."""
        rng = random.Random(42)
        value = CfgValue.of([10, 20])
        for _ in range(50):
            assert 10 <= value.generate_int(rng) < 20

    def test_generate_int_empty_range_raises(self):
        """Test an empty range raises ValueError."""
        with pytest.raises(ValueError):
            CfgValue.of([5, 5]).generate_int()

    def test_generate_int_other_shapes(self):
        """Test unsupported shapes give None."""
        assert CfgValue.of(1.0).generate_int() is None
        assert CfgValue.of([1, 2, 3]).generate_int() is None
        assert CfgValue.of([1.0, 2.0]).generate_int() is None
        assert CfgValue.of([]).generate_int() is None

    def test_generate_float(self):
        """Test float generation for each shape."""
        rng = random.Random(7)
        assert CfgValue.of(1.5).generate_float() == 1.5
        assert CfgValue.of([2.5]).generate_float() == 2.5
        drawn = CfgValue.of([1.0, 2.0]).generate_float(rng)
        assert 1.0 <= drawn <= 2.0
        assert CfgValue.of(3).generate_float() is None
