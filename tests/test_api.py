"""
API 服务测试
"""
import unittest

from fastapi.testclient import TestClient

from pinmatch.api import server
from pinmatch.engine import MatcherConfig, StringMatcher


class TestServer(unittest.TestCase):
    """测试 FastAPI 接口."""

    def setUp(self):
        server.matcher = StringMatcher(MatcherConfig())
        self.client = TestClient(server.app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        server.matcher = None

    def test_health(self):
        """测试健康检查."""
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")
        self.assertIn("X-Request-ID", response.headers)

    def test_match(self):
        """测试单条匹配."""
        response = self.client.post("/match", json={"query": "fi", "candidate": "Project File"})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["raw_score"], 65)
        self.assertEqual(data["matched_indices"], [8, 9])
        self.assertTrue(data["precision_met"])

    def test_match_empty_query(self):
        """测试空查询返回未匹配而非错误."""
        response = self.client.post("/match", json={"query": "", "candidate": "Project File"})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["success"])

    def test_rank(self):
        """测试排序."""
        response = self.client.post("/rank", json={
            "query": "project file",
            "candidates": ["Project File Name", "xyz", "Project File"],
        })
        self.assertEqual(response.status_code, 200)
        results = response.json()["results"]
        self.assertEqual([r["candidate"] for r in results], ["Project File", "Project File Name"])
        self.assertEqual(results[0]["score"], 152)

    def test_rank_top_k(self):
        """测试返回数量."""
        response = self.client.post("/rank", json={
            "query": "pf",
            "candidates": [f"Project File {i}" for i in range(10)],
            "top_k": 3,
        })
        self.assertEqual(len(response.json()["results"]), 3)

    def test_rank_empty_query(self):
        """测试空查询."""
        response = self.client.post("/rank", json={"query": "  ", "candidates": ["a"]})
        self.assertEqual(response.status_code, 400)

    def test_settings(self):
        """测试读取与更新设置."""
        response = self.client.get("/settings")
        self.assertEqual(response.json(), {"search_precision": 0, "should_use_pinyin": False})

        response = self.client.put("/settings", json={"search_precision": "regular"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["search_precision"], 50)

        # 47 < 50，匹配但被过滤
        data = self.client.post("/match", json={"query": "pf", "candidate": "Project File"}).json()
        self.assertTrue(data["success"])
        self.assertEqual(data["raw_score"], 47)
        self.assertEqual(data["score"], 0)
        self.assertFalse(data["precision_met"])

        response = self.client.put("/settings", json={"search_precision": 10, "should_use_pinyin": True})
        self.assertEqual(response.json(), {"search_precision": 10, "should_use_pinyin": True})

    def test_settings_invalid(self):
        """测试非法精度."""
        response = self.client.put("/settings", json={"search_precision": "strict"})
        self.assertEqual(response.status_code, 400)


if __name__ == '__main__':
    unittest.main()
