import unittest

from app.core.errors import ErrorCode, InvalidPage
from app.services.query.paging import paginate, validate_page


class PaginatorTests(unittest.TestCase):
    def setUp(self):
        self.records = list(range(1, 26))

    def test_pages_are_contiguous_slices(self):
        self.assertEqual(paginate(self.records, 1, 10), list(range(1, 11)))
        self.assertEqual(paginate(self.records, 2, 10), list(range(11, 21)))
        self.assertEqual(paginate(self.records, 3, 10), list(range(21, 26)))

    def test_page_past_the_end_is_empty(self):
        self.assertEqual(paginate(self.records, 4, 10), [])
        self.assertEqual(paginate([], 1, 10), [])

    def test_second_page_of_fifteen_holds_the_last_five(self):
        records = list(range(1, 16))
        self.assertEqual(paginate(records, 2, 10), [11, 12, 13, 14, 15])
        self.assertEqual(paginate(records, 3, 10), [])

    def test_pages_cover_every_record_once(self):
        collected = []
        for page_number in range(1, 5):
            collected.extend(paginate(self.records, page_number, 7))
        self.assertEqual(collected, self.records)

    def test_page_size_must_be_positive(self):
        with self.assertRaises(InvalidPage) as ctx:
            validate_page(1, 0)
        self.assertEqual(ctx.exception.code, ErrorCode.INVALID_PAGE)
        self.assertEqual(ctx.exception.message, "Page size invalid")

    def test_page_number_must_be_positive(self):
        with self.assertRaises(InvalidPage) as ctx:
            validate_page(0, 10)
        self.assertEqual(ctx.exception.message, "Page number invalid")
        with self.assertRaises(InvalidPage):
            validate_page(-3, 10)

    def test_valid_page_passes(self):
        validate_page(1, 1)
        validate_page(100, 500)


if __name__ == "__main__":
    unittest.main()
