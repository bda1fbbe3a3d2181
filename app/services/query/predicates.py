from __future__ import annotations

import enum
import operator
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from app.core.errors import UnsupportedOperator

from .descriptors import FieldDescriptor, FieldDescriptorTable
from .values import ORDERABLE_KINDS, ValueKind, convert_value, ordering_key

Predicate = Callable[[Any], bool]


class FilterOperator(str, enum.Enum):
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"
    CONTAINS = "Contains"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"


ORDERING_OPERATORS = {
    FilterOperator.GREATER_THAN: operator.gt,
    FilterOperator.GREATER_THAN_OR_EQUAL: operator.ge,
    FilterOperator.LESS_THAN: operator.lt,
    FilterOperator.LESS_THAN_OR_EQUAL: operator.le,
}
TEXT_OPERATORS = {FilterOperator.CONTAINS, FilterOperator.STARTS_WITH, FilterOperator.ENDS_WITH}


@dataclass(frozen=True)
class FilterCriterion:
    field_name: str
    operator: str
    value: str


def accept_all(record: Any) -> bool:
    return True


def parse_operator(raw: str, field: str) -> FilterOperator:
    # Exact, case-sensitive match against the enumerated names.
    try:
        return FilterOperator(raw)
    except ValueError:
        raise UnsupportedOperator(str(raw), field)


def _text_test(op: FilterOperator, expected: str) -> Callable[[str], bool]:
    if op is FilterOperator.CONTAINS:
        return lambda actual: expected in actual
    if op is FilterOperator.STARTS_WITH:
        return lambda actual: actual.startswith(expected)
    return lambda actual: actual.endswith(expected)


def compile_criterion(criterion: FilterCriterion, table: FieldDescriptorTable) -> Predicate:
    descriptor: FieldDescriptor = table.resolve(criterion.field_name)
    op = parse_operator(criterion.operator, descriptor.name)
    kind = descriptor.kind

    if op in TEXT_OPERATORS and kind is not ValueKind.STRING:
        raise UnsupportedOperator(op.value, descriptor.name, kind.value)
    if op in ORDERING_OPERATORS and kind not in ORDERABLE_KINDS:
        raise UnsupportedOperator(op.value, descriptor.name, kind.value)

    expected = convert_value(kind, criterion.value, field=descriptor.name, enum_type=descriptor.enum_type)
    access = descriptor.accessor

    if op is FilterOperator.EQUAL:
        def _equal(record: Any) -> bool:
            actual = access(record)
            return actual is not None and actual == expected

        return _equal

    if op is FilterOperator.NOT_EQUAL:
        def _not_equal(record: Any) -> bool:
            actual = access(record)
            return actual is None or actual != expected

        return _not_equal

    if op in ORDERING_OPERATORS:
        compare = ORDERING_OPERATORS[op]
        bound = ordering_key(kind, expected)

        def _ordered(record: Any) -> bool:
            actual = ordering_key(kind, access(record))
            return actual is not None and compare(actual, bound)

        return _ordered

    test = _text_test(op, expected)

    def _text(record: Any) -> bool:
        actual = access(record)
        return actual is not None and test(str(actual))

    return _text


def compile_filters(criteria: Sequence[FilterCriterion] | None, table: FieldDescriptorTable) -> Predicate:
    """AND all criteria into one predicate.

    Every criterion is compiled before the combined predicate is returned, so an
    invalid criterion anywhere in the list fails the whole compilation.
    """
    if not criteria:
        return accept_all
    tests = tuple(compile_criterion(criterion, table) for criterion in criteria)
    if len(tests) == 1:
        return tests[0]

    def _all(record: Any) -> bool:
        return all(test(record) for test in tests)

    return _all
