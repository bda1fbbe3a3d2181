import unittest
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from app.core.errors import ErrorCode, ValueConversionFailed
from app.models.enums import BookingStatus
from app.services.query.values import ValueKind, convert_value, normalize_record_value


class ValueConversionTests(unittest.TestCase):
    def test_string_is_left_as_is(self):
        self.assertEqual(convert_value(ValueKind.STRING, "Main Hall", field="name"), "Main Hall")
        self.assertEqual(convert_value(ValueKind.STRING, "", field="name"), "")

    def test_integer_accepts_signed_digits_only(self):
        self.assertEqual(convert_value(ValueKind.INTEGER, "42", field="capacity"), 42)
        self.assertEqual(convert_value(ValueKind.INTEGER, "-7", field="capacity"), -7)
        self.assertEqual(convert_value(ValueKind.INTEGER, 12, field="capacity"), 12)
        for raw in ("4.2", "abc", "", "1e3", True):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueConversionFailed):
                    convert_value(ValueKind.INTEGER, raw, field="capacity")

    def test_decimal_accepts_point_and_comma(self):
        self.assertEqual(convert_value(ValueKind.DECIMAL, "99.50", field="price"), Decimal("99.50"))
        self.assertEqual(convert_value(ValueKind.DECIMAL, "3,14", field="price"), Decimal("3.14"))
        self.assertEqual(convert_value(ValueKind.DECIMAL, 10.5, field="price"), Decimal("10.5"))

    def test_decimal_rejects_garbage_and_non_finite(self):
        for raw in ("cheap", "NaN", "Infinity", ""):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueConversionFailed):
                    convert_value(ValueKind.DECIMAL, raw, field="price")

    def test_boolean_literals(self):
        self.assertTrue(convert_value(ValueKind.BOOLEAN, "true", field="is_active"))
        self.assertTrue(convert_value(ValueKind.BOOLEAN, "TRUE", field="is_active"))
        self.assertTrue(convert_value(ValueKind.BOOLEAN, "1", field="is_active"))
        self.assertFalse(convert_value(ValueKind.BOOLEAN, "false", field="is_active"))
        self.assertFalse(convert_value(ValueKind.BOOLEAN, "0", field="is_active"))

    def test_boolean_invalid_value_fails(self):
        with self.assertRaises(ValueConversionFailed) as ctx:
            convert_value(ValueKind.BOOLEAN, "maybe", field="is_active")
        self.assertEqual(ctx.exception.code, ErrorCode.VALUE_CONVERSION_FAILED)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.details["field"], "is_active")

    def test_datetime_date_only_is_midnight_utc(self):
        value = convert_value(ValueKind.DATETIME, "2026-02-26", field="starts_at")
        self.assertEqual(value, datetime(2026, 2, 26, tzinfo=timezone.utc))

    def test_datetime_with_offset_is_moved_to_utc(self):
        value = convert_value(ValueKind.DATETIME, "2026-02-26T10:15:00+03:00", field="starts_at")
        self.assertEqual(value, datetime(2026, 2, 26, 7, 15, tzinfo=timezone.utc))
        self.assertEqual(value.utcoffset(), timedelta(0))

    def test_datetime_naive_and_zulu_are_utc(self):
        naive = convert_value(ValueKind.DATETIME, "2026-02-26T10:15:00", field="starts_at")
        zulu = convert_value(ValueKind.DATETIME, "2026-02-26T10:15:00Z", field="starts_at")
        self.assertEqual(naive, zulu)
        self.assertEqual(naive.tzinfo, timezone.utc)

    def test_datetime_invalid_fails(self):
        with self.assertRaises(ValueConversionFailed):
            convert_value(ValueKind.DATETIME, "26/02/2026", field="starts_at")

    def test_identifier_accepts_uuid_text(self):
        uid = uuid.uuid4()
        self.assertEqual(convert_value(ValueKind.IDENTIFIER, str(uid), field="venue_id"), uid)
        with self.assertRaises(ValueConversionFailed):
            convert_value(ValueKind.IDENTIFIER, "not-a-uuid", field="venue_id")

    def test_enumeration_matches_name_or_value_ignoring_case(self):
        self.assertIs(
            convert_value(ValueKind.ENUMERATION, "confirmed", field="status", enum_type=BookingStatus),
            BookingStatus.CONFIRMED,
        )
        with self.assertRaises(ValueConversionFailed):
            convert_value(ValueKind.ENUMERATION, "LOST", field="status", enum_type=BookingStatus)

    def test_none_never_converts(self):
        for kind in ValueKind:
            with self.subTest(kind=kind):
                with self.assertRaises(ValueConversionFailed):
                    convert_value(kind, None, field="anything")


class RecordValueNormalizationTests(unittest.TestCase):
    def test_naive_datetime_is_read_as_utc(self):
        value = normalize_record_value(ValueKind.DATETIME, datetime(2026, 1, 1, 12, 0))
        self.assertEqual(value, datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))

    def test_date_becomes_midnight_datetime(self):
        value = normalize_record_value(ValueKind.DATETIME, date(1990, 5, 17))
        self.assertEqual(value, datetime(1990, 5, 17, tzinfo=timezone.utc))

    def test_float_becomes_decimal(self):
        self.assertEqual(normalize_record_value(ValueKind.DECIMAL, 12.5), Decimal("12.5"))

    def test_none_stays_none(self):
        self.assertIsNone(normalize_record_value(ValueKind.INTEGER, None))


if __name__ == "__main__":
    unittest.main()
