"""
Tests for RequestBag and the loose emptiness predicate (bag.py).
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from requestbag.bag import RequestBag, is_empty_value


# ============================================================================
# is_empty_value
# ============================================================================

class TestIsEmptyValue:

    @pytest.mark.parametrize("value", [None, False, "", 0, 0.0, -0.0, [], (), {}])
    def test_empty_values(self, value):
        assert is_empty_value(value) is True

    @pytest.mark.parametrize(
        "value",
        ["0", " ", "x", b"", 1, -1, 0.5, True, [None], ("",), {"a": ""}, set(), object()],
    )
    def test_non_empty_values(self, value):
        assert is_empty_value(value) is False

    @pytest.mark.parametrize("value", [Decimal(0), Fraction(0), 0j])
    def test_other_numeric_zeros_are_empty(self, value):
        assert is_empty_value(value) is True

    @pytest.mark.parametrize("value", [Decimal("0.5"), Fraction(1, 3), 1j])
    def test_other_non_zero_numbers_are_not_empty(self, value):
        assert is_empty_value(value) is False

    def test_empty_bag_is_not_an_empty_value(self):
        # RequestBag is not a Mapping, so an empty bag is still a value
        assert is_empty_value(RequestBag()) is False


# ============================================================================
# add / get
# ============================================================================

class TestAddGet:

    def test_add_and_get(self):
        bag = RequestBag()
        bag.add("key", "value")
        assert bag.get("key") == "value"

    def test_get_missing_returns_default(self):
        bag = RequestBag()
        assert bag.get("nonexistent", "default") == "default"

    def test_get_missing_returns_none_without_default(self):
        bag = RequestBag()
        assert bag.get("nonexistent") is None

    def test_add_overwrites(self):
        bag = RequestBag()
        bag.add("key", "first").add("key", "second")
        assert bag.get("key") == "second"
        assert bag.all() == {"key": "second"}

    def test_stored_none_is_returned_over_default(self):
        bag = RequestBag()
        bag.add("key", None)
        assert bag.get("key", "default") is None

    def test_stored_falsy_is_returned_over_default(self):
        bag = RequestBag()
        bag.add("zero", 0).add("blank", "")
        assert bag.get("zero", 99) == 0
        assert bag.get("blank", "fallback") == ""

    def test_values_are_stored_by_reference(self):
        bag = RequestBag()
        items = ["a"]
        bag.add("items", items)
        items.append("b")
        assert bag.get("items") is items
        assert bag.get("items") == ["a", "b"]

    def test_heterogeneous_values(self):
        bag = RequestBag()
        payload = {"nested": [1, 2, {"x": None}]}
        bag.add("int", 1).add("payload", payload).add("obj", bag)
        assert bag.get("int") == 1
        assert bag.get("payload") is payload
        assert bag.get("obj") is bag


# ============================================================================
# has / exists
# ============================================================================

class TestHasExists:

    def test_has_true_for_non_empty(self):
        bag = RequestBag()
        bag.add("key", "value")
        assert bag.has("key") is True

    def test_has_false_for_missing(self):
        bag = RequestBag()
        assert bag.has("nonexistent") is False

    @pytest.mark.parametrize("value", [None, "", False, 0, 0.0, [], {}])
    def test_has_false_but_exists_true_for_empty(self, value):
        bag = RequestBag()
        bag.add("key", value)
        assert bag.has("key") is False
        assert bag.exists("key") is True

    @pytest.mark.parametrize("value", ["0", True, 1, [0], {"k": None}])
    def test_has_true_for_non_empty_edge_values(self, value):
        bag = RequestBag()
        bag.add("key", value)
        assert bag.has("key") is True

    def test_exists_false_for_missing(self):
        bag = RequestBag()
        assert bag.exists("nonexistent") is False

    def test_contains_is_strict_presence(self):
        bag = RequestBag()
        bag.add("blank", "")
        assert "blank" in bag
        assert "missing" not in bag


# ============================================================================
# remove / clear / all
# ============================================================================

class TestRemoveClearAll:

    def test_remove(self):
        bag = RequestBag()
        bag.add("key", "value")
        bag.remove("key")
        assert bag.has("key") is False
        assert bag.exists("key") is False

    def test_remove_missing_is_noop(self):
        bag = RequestBag()
        bag.add("other", 1)
        assert bag.remove("nonexistent") is bag
        assert bag.exists("nonexistent") is False
        assert bag.all() == {"other": 1}

    def test_all(self):
        bag = RequestBag()
        bag.add("key1", "value1")
        bag.add("key2", "value2")
        assert bag.all() == {"key1": "value1", "key2": "value2"}

    def test_all_preserves_insertion_order(self):
        bag = RequestBag()
        bag.add("b", 1).add("a", 2).add("c", 3)
        assert list(bag.all()) == ["b", "a", "c"]

    def test_all_returns_copy(self):
        bag = RequestBag()
        bag.add("key", "value")
        snapshot = bag.all()
        snapshot["injected"] = True
        assert bag.exists("injected") is False

    def test_clear(self):
        bag = RequestBag()
        bag.add("key1", "value1").add("key2", "value2")
        bag.clear()
        assert bag.all() == {}
        assert len(bag) == 0

    def test_clear_empty_bag(self):
        bag = RequestBag()
        assert bag.clear() is bag
        assert bag.all() == {}


# ============================================================================
# merge
# ============================================================================

class TestMerge:

    def test_merge(self):
        bag = RequestBag()
        bag.add("key1", "value1")
        bag.merge({"key2": "value2", "key3": "value3"})
        assert bag.all() == {"key1": "value1", "key2": "value2", "key3": "value3"}

    def test_merge_overwrites_existing_keys(self):
        bag = RequestBag()
        bag.add("key", "original").add("keep", "me")
        bag.merge({"key": "updated"})
        assert bag.get("key") == "updated"
        assert bag.get("keep") == "me"

    def test_merge_empty_mapping(self):
        bag = RequestBag()
        bag.add("key", "value")
        bag.merge({})
        assert bag.all() == {"key": "value"}

    def test_merge_non_mapping_is_type_error(self):
        bag = RequestBag()
        with pytest.raises(TypeError):
            bag.merge(42)


# ============================================================================
# Chaining / isolation
# ============================================================================

class TestChaining:

    def test_methods_are_chainable(self):
        bag = RequestBag()
        result = bag.add("key1", "value1").add("key2", "value2").remove("key1")
        assert result is bag
        assert bag.has("key1") is False
        assert bag.has("key2") is True

    def test_every_mutator_returns_self(self):
        bag = RequestBag()
        assert bag.add("a", 1) is bag
        assert bag.merge({"b": 2}) is bag
        assert bag.remove("a") is bag
        assert bag.clear() is bag

    def test_independent_bags_do_not_share_state(self):
        first = RequestBag()
        second = RequestBag()
        first.add("key", "value")
        assert second.all() == {}
        second.merge({"other": 1})
        assert first.all() == {"key": "value"}


class TestDunder:

    def test_len_and_iter(self):
        bag = RequestBag()
        bag.add("a", 1).add("b", None)
        assert len(bag) == 2
        assert list(bag) == ["a", "b"]

    def test_empty_bag_is_falsy(self):
        assert not RequestBag()

    def test_repr(self):
        bag = RequestBag()
        bag.add("a", "x")
        assert repr(bag) == "RequestBag({'a': 'x'})"


def test_walkthrough():
    bag = RequestBag()
    bag.add("a", "x")
    bag.add("b", "")
    assert bag.has("a") is True
    assert bag.has("b") is False
    assert bag.exists("b") is True

    bag.merge({"b": "y", "c": "z"})
    assert bag.all() == {"a": "x", "b": "y", "c": "z"}

    bag.clear()
    assert bag.all() == {}
