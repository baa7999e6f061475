import json
import unittest
from datetime import datetime, timedelta

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from fakes import FakeDatabase
from spoon.dtos.insight import Insight, InsightAnalytics
from spoon.services.exceptions import StorageFailure, ValidationError
from spoon.services.history_service import HistoryService


class TestHistoryService(unittest.TestCase):
    def setUp(self):
        self.db = FakeDatabase()
        self.service = HistoryService(self.db)
        self.user_id = str(ObjectId())
        self.other_user_id = str(ObjectId())

    def _seed(self, user_id, count):
        base = datetime(2024, 1, 1)
        for i in range(count):
            self.db.insight_history.insert_one(
                {
                    "user_id": ObjectId(user_id),
                    "repo_url": f"https://github.com/o/r{i}",
                    "repo_name": f"r{i}",
                    "repo_owner": "o",
                    "summary": f"summary {i}",
                    "technologies": json.dumps(["Python"]),
                    "insights": json.dumps({"name": f"r{i}"}),
                    "stars": i,
                    "forks": 0,
                    "created_at": base + timedelta(minutes=i),
                    "updated_at": base + timedelta(minutes=i),
                }
            )

    def test_pagination_of_twelve_records(self):
        self._seed(self.user_id, 12)

        first = self.service.list(self.user_id, page=1, limit=5)
        self.assertEqual(len(first.items), 5)
        self.assertEqual(first.total_pages, 3)
        self.assertEqual(first.total_items, 12)
        self.assertTrue(first.has_next)
        self.assertFalse(first.has_prev)
        self.assertEqual(first.items[0].repo_name, "r11")

        last = self.service.list(self.user_id, page=3, limit=5)
        self.assertEqual([item.repo_name for item in last.items], ["r1", "r0"])
        self.assertFalse(last.has_next)
        self.assertTrue(last.has_prev)
        self.assertEqual(
            last.pagination(),
            {
                "currentPage": 3,
                "totalPages": 3,
                "totalItems": 12,
                "itemsPerPage": 5,
                "hasNext": False,
                "hasPrev": True,
            },
        )

    def test_empty_history(self):
        page = self.service.list(self.user_id)
        self.assertEqual(page.items, [])
        self.assertEqual(page.total_pages, 0)
        self.assertFalse(page.has_next)
        self.assertFalse(page.has_prev)

    def test_rejects_non_positive_page_or_limit(self):
        with self.assertRaises(ValidationError):
            self.service.list(self.user_id, page=0)
        with self.assertRaises(ValidationError):
            self.service.list(self.user_id, limit=0)

    def test_list_is_scoped_to_owner(self):
        self._seed(self.user_id, 2)
        self._seed(self.other_user_id, 3)
        self.assertEqual(self.service.list(self.user_id).total_items, 2)
        self.assertEqual(self.service.list(self.other_user_id).total_items, 3)

    def test_save_and_read_back(self):
        insight = Insight(
            repo_url="https://github.com/octocat/hello",
            name="hello",
            summary="Says hello",
            technologies=["Go", "Docker"],
            analytics=InsightAnalytics(project_age="1 year", total_commits=10),
        )
        saved = self.service.save_insight(self.user_id, insight, owner="octocat", stars=5, forks=2)

        self.assertEqual(saved.repo_owner, "octocat")
        self.assertEqual(saved.repo_name, "hello")
        self.assertEqual(saved.technologies, ["Go", "Docker"])
        self.assertEqual(saved.stars, 5)
        self.assertEqual(saved.insights["repoUrl"], "https://github.com/octocat/hello")
        self.assertEqual(saved.insights["analytics"]["projectAge"], "1 year")

        stored = self.db.insight_history.docs[0]
        self.assertIsInstance(stored["technologies"], str)
        self.assertEqual(stored["user_id"], ObjectId(self.user_id))

        fetched = self.service.get_one(saved.id, self.user_id)
        self.assertEqual(fetched, saved)

    def test_get_and_delete_are_ownership_scoped(self):
        saved = self.service.save(
            self.user_id,
            repo_url="https://github.com/o/r",
            repo_name="r",
            repo_owner="o",
            summary=None,
            technologies=[],
            insights={},
        )
        self.assertIsNone(self.service.get_one(saved.id, self.other_user_id))
        self.assertFalse(self.service.delete(saved.id, self.other_user_id))
        self.assertIsNone(self.service.get_one("not-an-id", self.user_id))
        self.assertFalse(self.service.delete("not-an-id", self.user_id))

        self.assertTrue(self.service.delete(saved.id, self.user_id))
        self.assertFalse(self.service.delete(saved.id, self.user_id))
        self.assertIsNone(self.service.get_one(saved.id, self.user_id))

    def test_corrupt_json_fields_read_as_empty(self):
        self.db.insight_history.insert_one(
            {
                "user_id": ObjectId(self.user_id),
                "repo_url": "https://github.com/o/r",
                "repo_name": "r",
                "repo_owner": "o",
                "technologies": "{broken",
                "insights": "[]",
                "created_at": datetime(2024, 1, 1),
            }
        )
        item = self.service.list(self.user_id).items[0]
        self.assertEqual(item.technologies, [])
        self.assertEqual(item.insights, {})

    def test_storage_errors_become_storage_failure(self):
        self.db.insight_history.fail_with = ServerSelectionTimeoutError("no server")
        with self.assertRaises(StorageFailure):
            self.service.list(self.user_id)

    def test_invalid_user_id_on_save(self):
        with self.assertRaises(ValidationError):
            self.service.save(
                "nope",
                repo_url="https://github.com/o/r",
                repo_name="r",
                repo_owner="o",
                summary=None,
                technologies=[],
                insights={},
            )


if __name__ == "__main__":
    unittest.main()
