import unittest
from unittest import mock

from news_fakes import MemoryStore, record

from midnews.config import Config
from midnews.storage.news_store import StoreError
from web_app import create_app


class BrokenStore(MemoryStore):
    def find_between(self, start, end):
        raise StoreError("database is gone")


class TestNewsApi(unittest.TestCase):
    def setUp(self):
        store = MemoryStore([
            record("01.03.2024 10:00", title="A", content="<div>a</div>"),
            record("02.03.2024 09:00", title="Б"),
            record("05.03.2024 12:00", title="C"),
        ])
        self.client = create_app(store=store, config=Config()).test_client()

    def test_health(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["status"], "healthy")

    def test_between_returns_range_oldest_first(self):
        r = self.client.get("/api/news/between?start=2024-03-01T00:00&end=2024-03-02T23:59")
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["success"])
        self.assertEqual(data["count"], 2)
        self.assertEqual([n["title"] for n in data["data"]], ["A", "Б"])
        self.assertEqual(data["data"][0]["publication_date"], "2024-03-01T10:00")
        self.assertEqual(data["data"][0]["content"], "<div>a</div>")

    def test_missing_parameter_is_400(self):
        r = self.client.get("/api/news/between?start=2024-03-01T00:00")
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["success"])

    def test_invalid_date_is_400(self):
        r = self.client.get("/api/news/between?start=yesterday&end=2024-03-02T00:00")
        self.assertEqual(r.status_code, 400)

    def test_inverted_range_is_400(self):
        r = self.client.get("/api/news/between?start=2024-03-05T00:00&end=2024-03-01T00:00")
        self.assertEqual(r.status_code, 400)

    def test_store_error_is_500(self):
        client = create_app(store=BrokenStore(), config=Config()).test_client()
        r = client.get("/api/news/between?start=2024-03-01T00:00&end=2024-03-02T00:00")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.get_json()["error"], "Failed to fetch news")

    def test_injected_store_skips_environment_config(self):
        with mock.patch("web_app.Config.from_env", side_effect=ValueError("bad env")) as from_env:
            client = create_app(store=MemoryStore([record("01.03.2024 10:00")])).test_client()
        from_env.assert_not_called()
        r = client.get("/api/news/between?start=2024-03-01T00:00&end=2024-03-02T00:00")
        self.assertEqual(r.get_json()["count"], 1)


if __name__ == "__main__":
    unittest.main()
