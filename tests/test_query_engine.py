import json
import unittest

from app.core.errors import (
    InvalidPage,
    InvalidSortDirection,
    MalformedFilter,
    UnknownField,
    UnsupportedOperator,
    ValueConversionFailed,
)
from app.schemas.query import QueryRequest
from app.services.query.engine import parse_filter_description, run_query

from tests.query_fixtures import Concert, concert_table


class _CountingSource:
    def __init__(self, records):
        self.records = records
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return list(self.records)


def _filters(*clauses):
    return json.dumps([{"PropertyName": f, "Operator": o, "Value": v} for f, o, v in clauses])


class FilterDescriptionTests(unittest.TestCase):
    def test_absent_or_blank_description_has_no_criteria(self):
        self.assertEqual(parse_filter_description(None), [])
        self.assertEqual(parse_filter_description("  "), [])
        self.assertEqual(parse_filter_description("[]"), [])

    def test_clauses_become_criteria(self):
        criteria = parse_filter_description(_filters(("Name", "Equal", "Rock"), ("Capacity", "GreaterThan", "10")))
        self.assertEqual([(c.field_name, c.operator, c.value) for c in criteria], [
            ("Name", "Equal", "Rock"),
            ("Capacity", "GreaterThan", "10"),
        ])

    def test_json_scalars_are_read_as_text(self):
        raw = json.dumps([{"PropertyName": "capacity", "Operator": "Equal", "Value": 10}])
        self.assertEqual(parse_filter_description(raw)[0].value, "10")
        raw = json.dumps([{"PropertyName": "is_sold_out", "Operator": "Equal", "Value": True}])
        self.assertEqual(parse_filter_description(raw)[0].value, "true")

    def test_malformed_descriptions(self):
        for raw in ("not json", '{"PropertyName": "name"}', '[{"Operator": "Equal"}]'):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedFilter):
                    parse_filter_description(raw)


class QueryEngineTests(unittest.TestCase):
    def setUp(self):
        self.table = concert_table()
        self.records = [
            Concert(name="Rock Night", city="Oslo", capacity=500),
            Concert(name="Jazz Club", city="Bergen", capacity=80),
            Concert(name="Rock Day", city="Oslo", capacity=300),
            Concert(name="Opera Gala", city="Oslo", capacity=300),
            Concert(name="Folk Evening", city=None, capacity=None),
        ]
        self.source = _CountingSource(self.records)

    def _run(self, **kwargs):
        return run_query(QueryRequest(**kwargs), self.table, self.source)

    def test_defaults_return_first_page_in_retrieval_order(self):
        result = self._run()
        self.assertEqual(result, self.records)
        self.assertEqual(self.source.calls, 1)

    def test_filter_search_sort_and_page_compose(self):
        result = self._run(
            filters=_filters(("Capacity", "GreaterThanOrEqual", "300")),
            search_term="oslo",
            sort_field="Capacity",
            sort_order="desc",
            page_number=1,
            page_size=2,
        )
        self.assertEqual([r.name for r in result], ["Rock Night", "Rock Day"])

        second = self._run(
            filters=_filters(("Capacity", "GreaterThanOrEqual", "300")),
            search_term="oslo",
            sort_field="Capacity",
            sort_order="desc",
            page_number=2,
            page_size=2,
        )
        self.assertEqual([r.name for r in second], ["Opera Gala"])

    def test_result_is_never_longer_than_page_size(self):
        for size in (1, 2, 3, 10):
            with self.subTest(size=size):
                self.assertLessEqual(len(self._run(page_size=size)), size)

    def test_every_result_satisfies_filters_and_search(self):
        result = self._run(filters=_filters(("City", "Equal", "Oslo")), search_term="rock", page_size=50)
        self.assertTrue(result)
        for record in result:
            self.assertEqual(record.city, "Oslo")
            self.assertIn("rock", record.name.lower())

    def test_sorted_output_is_ordered_by_the_sort_field(self):
        result = self._run(sort_field="name", sort_order="asc", page_size=50)
        names = [r.name for r in result]
        self.assertEqual(names, sorted(names))

    def test_page_past_the_end_is_empty(self):
        self.assertEqual(self._run(page_number=9, page_size=10), [])

    def test_empty_source_gives_empty_page(self):
        self.source.records = []
        self.assertEqual(self._run(search_term="rock"), [])

    def test_rejected_queries_never_reach_the_source(self):
        cases = [
            ({"page_size": 0}, InvalidPage),
            ({"page_number": 0}, InvalidPage),
            ({"filters": "nonsense"}, MalformedFilter),
            ({"filters": _filters(("Genre", "Equal", "rock"))}, UnknownField),
            ({"filters": _filters(("name", "Like", "rock"))}, UnsupportedOperator),
            ({"filters": _filters(("capacity", "Equal", "many"))}, ValueConversionFailed),
            ({"sort_field": "Genre"}, UnknownField),
            ({"sort_field": "name", "sort_order": "sideways"}, InvalidSortDirection),
            ({"sort_order": "sideways"}, InvalidSortDirection),
        ]
        for kwargs, error in cases:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(error):
                    self._run(**kwargs)
        self.assertEqual(self.source.calls, 0)

    def test_page_size_is_checked_before_filters(self):
        with self.assertRaises(InvalidPage):
            self._run(page_size=0, filters="nonsense")

    def test_repeated_queries_are_deterministic(self):
        kwargs = {"sort_field": "capacity", "sort_order": "asc", "page_size": 50}
        self.assertEqual(self._run(**kwargs), self._run(**kwargs))


if __name__ == "__main__":
    unittest.main()
