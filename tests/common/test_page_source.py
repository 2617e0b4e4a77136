import unittest
from typing import Dict, List, Optional, Tuple

from listing_crawler.common.downloader import BadStatusError
from listing_crawler.common.page_source import PageSource

URL = 'https://example.com/cars/results'

class FakeCache:
    def __init__(self, entries: Optional[Dict[str, str]] = None, writable: bool = True):
        self.entries = dict(entries or {})
        self.writable = writable
        self.stored: List[str] = []

    async def lookup(self, url: str) -> Optional[str]:
        return self.entries.get(url)

    async def store(self, url: str, body: str) -> bool:
        self.stored.append(url)
        if not self.writable:
            return False
        self.entries[url] = body
        return True

class FakeDownloader:
    def __init__(self, body: str = '', error: Optional[Exception] = None, final_url: Optional[str] = None):
        self.body = body
        self.error = error
        self.final_url = final_url
        self.requested: List[str] = []

    async def fetch(self, url: str) -> Tuple[str, str]:
        self.requested.append(url)
        if self.error:
            raise self.error
        return self.final_url or url, self.body

class TestPageSource(unittest.IsolatedAsyncioTestCase):
    async def test_cache_hit_skips_network(self):
        cache = FakeCache({URL: 'cached'})
        downloader = FakeDownloader('fresh')
        result = await PageSource(cache, downloader).fetch(URL)

        self.assertEqual(result.body, 'cached')
        self.assertTrue(result.from_cache)
        self.assertEqual(downloader.requested, [])
        self.assertEqual(cache.stored, [])

    async def test_cache_miss_downloads_and_stores(self):
        cache = FakeCache()
        downloader = FakeDownloader('fresh')
        result = await PageSource(cache, downloader).fetch(URL)

        self.assertEqual(result.body, 'fresh')
        self.assertFalse(result.from_cache)
        self.assertEqual(result.url, URL)
        self.assertEqual(downloader.requested, [URL])
        self.assertEqual(cache.entries[URL], 'fresh')

    async def test_redirected_page_keeps_final_url(self):
        """下载跳转后结果URL为最终URL, 缓存仍以请求URL为键"""
        cache = FakeCache()
        downloader = FakeDownloader('fresh', final_url='https://example.com/cars/results/')
        result = await PageSource(cache, downloader).fetch(URL)

        self.assertEqual(result.url, 'https://example.com/cars/results/')
        self.assertEqual(cache.stored, [URL])

    async def test_store_failure_is_not_fatal(self):
        cache = FakeCache(writable=False)
        source = PageSource(cache, FakeDownloader('fresh'))

        self.assertEqual(await source.get(URL), 'fresh')
        self.assertEqual(cache.stored, [URL])

    async def test_download_error_propagates(self):
        cache = FakeCache()
        source = PageSource(cache, FakeDownloader(error=BadStatusError(URL, 404)))

        with self.assertRaises(BadStatusError):
            await source.get(URL)
        self.assertEqual(cache.stored, [])

if __name__ == '__main__':
    unittest.main()
