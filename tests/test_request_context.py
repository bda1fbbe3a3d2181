import logging
import os
import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.core.request_context import RequestIdFilter, current_request_id, install_request_context
from app.main import app


class RequestContextTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()

    def test_health_has_security_headers_and_request_id(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertEqual(response.headers.get("x-frame-options"), "DENY")
        self.assertEqual(response.headers.get("referrer-policy"), "no-referrer")
        self.assertEqual(response.headers.get("cache-control"), "no-store")
        self.assertRegex(str(response.headers.get("x-request-id")), r"^[A-Za-z0-9._-]{1,128}$")

    def test_valid_request_id_is_preserved(self):
        response = self.client.get("/health", headers={"X-Request-ID": "release-check-2026_10_19"})
        self.assertEqual(response.headers.get("x-request-id"), "release-check-2026_10_19")

    def test_invalid_request_id_is_replaced(self):
        response = self.client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
        request_id = response.headers.get("x-request-id")
        self.assertNotEqual(request_id, "bad id with spaces")
        self.assertRegex(str(request_id), r"^[A-Za-z0-9._-]{1,128}$")

    def test_unauthorized_response_keeps_headers(self):
        response = self.client.get("/api/venue")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertIsNotNone(response.headers.get("x-request-id"))

    def test_access_log_names_entity_and_request_id(self):
        with self.assertLogs("app.http", level="INFO") as captured:
            self.client.get("/api/venue", headers={"X-Request-ID": "venue-list-1"})
        line = captured.records[-1].getMessage()
        self.assertIn("GET /api/venue entity=venue status=401", line)
        self.assertIn("request_id=venue-list-1", line)

    def test_request_id_is_visible_to_handlers_and_cleared_after(self):
        side_app = FastAPI()
        install_request_context(side_app)

        @side_app.get("/whoami")
        def whoami():
            return {"request_id": current_request_id()}

        with TestClient(side_app) as client:
            response = client.get("/whoami", headers={"X-Request-ID": "inner-7"})
        self.assertEqual(response.json(), {"request_id": "inner-7"})
        self.assertIsNone(current_request_id())

    def test_log_filter_stamps_records(self):
        record = logging.LogRecord("app.query", logging.INFO, __file__, 1, "compiled", None, None)
        self.assertTrue(RequestIdFilter().filter(record))
        self.assertEqual(record.request_id, "-")


if __name__ == "__main__":
    unittest.main()
