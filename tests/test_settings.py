import unittest

from app.core.config import Settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = Settings(_env_file=None)
        self.assertEqual(settings.DEFAULT_PAGE_NUMBER, 1)
        self.assertEqual(settings.DEFAULT_PAGE_SIZE, 10)
        self.assertTrue(settings.DATABASE_URL)

    def test_database_is_configured_by_url_only(self):
        self.assertFalse([name for name in Settings.model_fields if name.startswith("POSTGRES_")])

    def test_cors_origins_are_split_and_trimmed(self):
        settings = Settings(_env_file=None, CORS_ORIGINS=" https://a.example , ,https://b.example")
        self.assertEqual(settings.cors_origins_list, ["https://a.example", "https://b.example"])


if __name__ == "__main__":
    unittest.main()
