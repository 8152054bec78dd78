#!/usr/bin/env python3
"""
Tests for the operator allow-list and scanner.
"""

from query_filter.operators import (
    DEFAULT_OPERATORS, FilterOperator, disallowed_operators, find_operators, is_operator
)


class TestDefaultOperators:
    """Test the default allow-list."""

    def test_eleven_operators_enabled(self):
        """All default operators are enabled."""
        assert set(DEFAULT_OPERATORS) == {
            "$or", "$and", "$ne", "$regex", "$in", "$nin",
            "$gt", "$lt", "$gte", "$lte", "$exists"
        }
        assert all(DEFAULT_OPERATORS.values())

    def test_from_string(self):
        """Test converting strings to operators."""
        assert FilterOperator.from_string("$regex") is FilterOperator.REGEX
        assert FilterOperator.from_string("$where") is None
        assert FilterOperator.is_valid("$nin")
        assert not FilterOperator.is_valid("nin")


class TestFindOperators:
    """Test the recursive operator scanner."""

    def test_scalars_contribute_nothing(self):
        """Non-container values have no operators."""
        assert find_operators(None) == []
        assert find_operators(42) == []
        assert find_operators("$or") == []

    def test_top_level_operator(self):
        """Test an operator at the top level."""
        assert find_operators({"$or": [{"a": 1}]}) == ["$or"]

    def test_nested_in_lists_and_dicts(self):
        """Operators inside arrays and sub-documents are found."""
        found = find_operators({
            "$and": [
                {"priority": {"$gte": 5}},
                {"$or": [{"status": {"$in": ["a", "b"]}}, {"tags": {"$exists": True}}]}
            ]
        })
        assert set(found) == {"$and", "$gte", "$or", "$in", "$exists"}

    def test_deduplicated(self):
        """Repeated operators are reported once."""
        found = find_operators({"$or": [{"a": {"$gt": 1}}, {"b": {"$gt": 2}}]})
        assert sorted(found) == ["$gt", "$or"]

    def test_plain_fields_ignored(self):
        """Keys without the $ prefix are not operators."""
        assert find_operators({"name": {"first": "x"}, "tags": ["$or"]}) == []

    def test_recurse_under_plain_key(self):
        """Containers under plain keys are still walked."""
        assert find_operators({"meta": {"deep": [{"$where": "1"}]}}) == ["$where"]

    def test_top_level_list(self):
        """A list at the root is walked."""
        assert find_operators([{"$ne": 1}, [{"$lt": 2}]]) == ["$ne", "$lt"]

    def test_non_string_keys(self):
        """Non-string keys are never operators."""
        assert not is_operator(1)
        assert find_operators({1: {"$gt": 0}}) == ["$gt"]


class TestDisallowedOperators:
    """Test matching found operators against an allow-list."""

    def test_missing_and_disabled(self):
        """Both unknown and disabled operators are reported."""
        allowed = dict(DEFAULT_OPERATORS, **{"$and": False})
        assert disallowed_operators(["$or", "$and", "$where"], allowed) == ["$and", "$where"]

    def test_all_allowed(self):
        """Nothing is reported when every operator is enabled."""
        assert disallowed_operators(["$or", "$in"], DEFAULT_OPERATORS) == []
