"""Tests for the predicate model."""

from datetime import datetime, timezone

import pytest

from seek_pagination.db.render import render_predicate
from seek_pagination.pagination.builder import build
from seek_pagination.pagination.ordering import Sql, asc, normalize_ordering
from seek_pagination.pagination.predicate import (
    FALSE,
    TRUE,
    And,
    Compare,
    IsNull,
    Not,
    Or,
    TupleCompare,
    conjoin,
    disjoin,
    dump_predicate,
    is_false,
    is_true,
    load_predicate,
)


class TestPredicateNodes:
    """Test predicate node construction."""

    def test_structural_equality(self):
        """Test identical trees compare equal."""
        left = Or(operands=(Compare(ref="a", op=">", value=1), IsNull(ref="a")))
        right = Or(operands=(Compare(ref="a", op=">", value=1), IsNull(ref="a")))

        assert left == right

    def test_nodes_are_immutable(self):
        """Test predicates cannot be modified after construction."""
        node = Compare(ref="a", op="=", value=1)

        with pytest.raises(Exception):
            node.value = 2

    def test_invalid_operator(self):
        """Test unknown comparison operators are rejected."""
        with pytest.raises(Exception):
            Compare(ref="a", op="!=", value=1)

    def test_tuple_compare_rejects_equality(self):
        """Test row-value comparisons only take ordering operators."""
        with pytest.raises(Exception):
            TupleCompare(refs=("a", "b"), op="=", values=(1, 2))

    def test_constants(self):
        """Test the empty conjunction and disjunction."""
        assert is_true(TRUE)
        assert is_false(FALSE)
        assert not is_true(FALSE)
        assert not is_false(And(operands=(IsNull(ref="a"),)))


class TestFolding:
    """Test conjoin and disjoin."""

    def test_conjoin_single_operand_collapses(self):
        """Test a one-operand AND is the operand itself."""
        node = IsNull(ref="a")

        assert conjoin([node]) == node

    def test_conjoin_drops_vacuous_terms(self):
        """Test TRUE operands are omitted."""
        node = IsNull(ref="a")

        assert conjoin([TRUE, node, TRUE]) == node

    def test_conjoin_with_false_is_false(self):
        """Test an unsatisfiable operand makes the conjunction unsatisfiable."""
        assert conjoin([IsNull(ref="a"), FALSE]) == FALSE

    def test_conjoin_empty_is_true(self):
        """Test an empty conjunction is vacuously true."""
        assert conjoin([]) == TRUE

    def test_conjoin_flattens(self):
        """Test nested conjunctions are flattened."""
        a, b, c = IsNull(ref="a"), IsNull(ref="b"), IsNull(ref="c")

        assert conjoin([a, And(operands=(b, c))]) == And(operands=(a, b, c))

    def test_disjoin_drops_unsatisfiable_terms(self):
        """Test FALSE operands are omitted."""
        node = IsNull(ref="a")

        assert disjoin([FALSE, node]) == node

    def test_disjoin_with_true_is_true(self):
        """Test a vacuous operand makes the disjunction vacuous."""
        assert disjoin([IsNull(ref="a"), TRUE]) == TRUE

    def test_disjoin_empty_is_false(self):
        """Test an empty disjunction matches nothing."""
        assert disjoin([]) == FALSE

    def test_disjoin_keeps_column_order(self):
        """Test disjuncts are emitted in the order given."""
        a, b = Compare(ref="a", op=">", value=1), Compare(ref="b", op=">", value=2)

        assert disjoin([a, b]).operands == (a, b)


class TestSerialization:
    """Test predicate serialization."""

    def test_dump_is_tagged(self):
        """Test dumped predicates carry a kind tag per node."""
        predicate = Or(operands=(
            Compare(ref="a", op=">", value=5),
            And(operands=(Compare(ref="a", op="=", value=5), Not(operand=IsNull(ref="b")))),
        ))

        data = dump_predicate(predicate)

        assert data["kind"] == "or"
        assert data["operands"][0] == {"kind": "compare", "ref": "a", "op": ">", "value": 5}
        assert data["operands"][1]["operands"][1] == {
            "kind": "not",
            "operand": {"kind": "is_null", "ref": "b"},
        }

    def test_load_round_trip(self):
        """Test a dumped predicate loads back into an equal tree."""
        predicate = Or(operands=(
            TupleCompare(refs=("a", "id"), op=">=", values=(5, 42)),
            Not(operand=IsNull(ref="a")),
        ))

        assert load_predicate(dump_predicate(predicate)) == predicate

    def test_sql_refs_load_back_as_sql(self):
        """Test expression refs survive a round trip and still render."""
        predicate = build(normalize_ordering([asc(Sql("id % 10")), asc("id")]), [3, 4])

        loaded = load_predicate(dump_predicate(predicate))

        assert loaded == predicate
        assert render_predicate(loaded) == render_predicate(predicate)

    def test_value_types(self):
        """Test typed refs get their comparison values validated back."""
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        predicate = Or(operands=(
            TupleCompare(refs=("created_at", "id"), op=">", values=(created_at, 4)),
            Compare(ref="created_at", op="=", value=created_at),
        ))

        data = dump_predicate(predicate)

        assert load_predicate(data) != predicate
        assert load_predicate(data, types={"created_at": datetime}) == predicate

    def test_value_types_keep_nulls(self):
        predicate = Compare(ref="created_at", op=">", value=None)

        assert load_predicate(dump_predicate(predicate), types={"created_at": datetime}) == predicate
