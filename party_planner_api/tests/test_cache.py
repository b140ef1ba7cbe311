import unittest

from party_planner_api.app.core.cache import ViewCache


class ViewCacheTests(unittest.IsolatedAsyncioTestCase):
    async def test_computes_once_until_revalidated(self):
        cache = ViewCache()
        calls = []

        async def compute():
            calls.append(1)
            return {"services": len(calls)}

        self.assertEqual(await cache.get_or_compute("/", compute), {"services": 1})
        self.assertEqual(await cache.get_or_compute("/", compute), {"services": 1})
        self.assertEqual(cache.revalidate("/", "/admin/services"), ["/", "/admin/services"])
        self.assertFalse(cache.is_cached("/"))
        self.assertEqual(await cache.get_or_compute("/", compute), {"services": 2})

    async def test_revalidating_unknown_paths_is_harmless(self):
        cache = ViewCache()
        cache.set("/admin/agenda", [])
        self.assertEqual(cache.revalidate("/admin/quotes"), ["/admin/quotes"])
        self.assertTrue(cache.is_cached("/admin/agenda"))
        cache.clear()
        self.assertIsNone(cache.get("/admin/agenda"))


if __name__ == "__main__":
    unittest.main()
