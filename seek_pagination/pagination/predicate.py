"""Predicate model emitted by the boundary builder.

Predicates are immutable trees handed to a renderer (see ``db.render``) or to
the in-memory evaluator. ``And(())`` is vacuously true and ``Or(())`` matches
nothing; ``conjoin`` and ``disjoin`` fold operand lists into the smallest
equivalent node.
"""

from typing import Annotated, Any, Iterable, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .ordering import Sql


ComparisonOp = Literal[">", ">=", "<", "<=", "="]
TupleOp = Literal[">", ">=", "<", "<="]

# Sql is tried first so a dumped expression ({"text": ...}) loads back as Sql.
Ref = Annotated[Union[Sql, str, Any], Field(union_mode="left_to_right")]


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Compare(_Node):
    """``ref <op> value``."""

    kind: Literal["compare"] = "compare"
    ref: Ref
    op: ComparisonOp
    value: Any


class IsNull(_Node):
    """``ref IS NULL``."""

    kind: Literal["is_null"] = "is_null"
    ref: Ref


class Not(_Node):
    kind: Literal["not"] = "not"
    operand: "Predicate"


class And(_Node):
    kind: Literal["and"] = "and"
    operands: Tuple["Predicate", ...] = ()


class Or(_Node):
    kind: Literal["or"] = "or"
    operands: Tuple["Predicate", ...] = ()


class TupleCompare(_Node):
    """Row-value comparison ``(a, b, ...) <op> (x, y, ...)``."""

    kind: Literal["tuple_compare"] = "tuple_compare"
    refs: Tuple[Ref, ...]
    op: TupleOp
    values: Tuple[Any, ...]


Predicate = Annotated[
    Union[Compare, IsNull, Not, And, Or, TupleCompare],
    Field(discriminator="kind")
]

for _model in (Not, And, Or):
    _model.model_rebuild()

predicate_adapter = TypeAdapter(Predicate)

TRUE = And()
FALSE = Or()


def is_true(predicate) -> bool:
    return isinstance(predicate, And) and not predicate.operands


def is_false(predicate) -> bool:
    return isinstance(predicate, Or) and not predicate.operands


def conjoin(operands: Iterable[Predicate]) -> Predicate:
    """Fold operands into a single AND, dropping vacuous terms."""
    flat = []
    for operand in operands:
        if is_false(operand):
            return FALSE
        if isinstance(operand, And):
            flat.extend(operand.operands)
        else:
            flat.append(operand)
    return flat[0] if len(flat) == 1 else And(operands=tuple(flat))


def disjoin(operands: Iterable[Predicate]) -> Predicate:
    """Fold operands into a single OR, dropping unsatisfiable terms."""
    flat = []
    for operand in operands:
        if is_true(operand):
            return TRUE
        if isinstance(operand, Or):
            flat.extend(operand.operands)
        else:
            flat.append(operand)
    return flat[0] if len(flat) == 1 else Or(operands=tuple(flat))


def dump_predicate(predicate: Predicate) -> dict:
    """JSON-compatible form of a predicate, tagged by ``kind``."""
    return predicate_adapter.dump_python(predicate, mode="json")


def load_predicate(data: Any, types: Optional[Mapping[Any, Any]] = None) -> Predicate:
    """Validate a dumped predicate back into a tree.

    Args:
        data: Output of dump_predicate
        types: Optional type per ref (e.g. datetime, UUID); comparison
            values for those refs are validated back from their JSON form

    Returns:
        Predicate tree
    """
    predicate = predicate_adapter.validate_python(data)
    if types:
        predicate = _with_value_types(predicate, types)
    return predicate


def _with_value_types(node: Predicate, types: Mapping[Any, Any]) -> Predicate:
    if isinstance(node, Compare):
        return node.model_copy(update={"value": _typed_value(types, node.ref, node.value)})
    if isinstance(node, TupleCompare):
        values = tuple(_typed_value(types, ref, value) for ref, value in zip(node.refs, node.values))
        return node.model_copy(update={"values": values})
    if isinstance(node, Not):
        return node.model_copy(update={"operand": _with_value_types(node.operand, types)})
    if isinstance(node, (And, Or)):
        operands = tuple(_with_value_types(operand, types) for operand in node.operands)
        return node.model_copy(update={"operands": operands})
    return node


def _typed_value(types: Mapping[Any, Any], ref: Any, value: Any) -> Any:
    type_ = types.get(ref)
    if value is None or type_ is None:
        return value
    return TypeAdapter(type_).validate_python(value)
