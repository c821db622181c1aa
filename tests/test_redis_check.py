import unittest
from unittest.mock import Mock, patch

import redis

from healthchecks.checks.redis_check import run_redis


class RedisCheckTests(unittest.TestCase):
    def test_runs_info_server(self) -> None:
        client = Mock()
        client.info.return_value = {"redis_version": "7.2.4"}

        with patch("healthchecks.checks.redis_check.redis.Redis.from_url", return_value=client) as mock_from_url:
            res = run_redis("redis://cache.local:6379/0")

        self.assertTrue(res.ok)
        mock_from_url.assert_called_once_with("redis://cache.local:6379/0")
        client.info.assert_called_once_with("server")
        client.close.assert_called_once()

    def test_connection_failure(self) -> None:
        client = Mock()
        client.info.side_effect = redis.ConnectionError("Error 111 connecting to cache.local:6379")

        with patch("healthchecks.checks.redis_check.redis.Redis.from_url", return_value=client):
            res = run_redis("redis://cache.local:6379/0")

        self.assertFalse(res.ok)
        self.assertEqual(res.error, "Redis: Error 111 connecting to cache.local:6379")
        client.close.assert_called_once()

    def test_malformed_url_fails_gracefully(self) -> None:
        res = run_redis("http://not-redis")

        self.assertFalse(res.ok)
        self.assertTrue(res.error.startswith("Redis: invalid URL"))


if __name__ == "__main__":
    unittest.main()
