import logging
from dataclasses import dataclass

from .cache_manager import PageCache
from .downloader import Downloader

@dataclass
class FetchResult:
    """页面获取结果"""
    url: str
    body: str
    from_cache: bool  # True: 缓存命中, False: 网络下载

class PageSource:
    """页面来源: 优先读取缓存, 未命中时下载并回写缓存"""

    def __init__(self, cache: PageCache, downloader: Downloader):
        self.cache = cache
        self.downloader = downloader
        self.logger = logging.getLogger(__name__)

    async def fetch(self, url: str) -> FetchResult:
        """获取页面, 下载失败时异常直接向上抛出"""
        body = await self.cache.lookup(url)
        if body is not None:
            self.logger.info(f"缓存命中: {url}")
            return FetchResult(url=url, body=body, from_cache=True)

        self.logger.info(f"开始下载页面: {url}")
        final_url, body = await self.downloader.fetch(url)
        self.logger.info(f"页面下载成功: {final_url}")

        # 缓存写入失败不影响爬取
        if await self.cache.store(url, body):
            self.logger.info("页面已缓存")
        else:
            self.logger.warning("页面无法缓存")

        # 相对链接以跳转后的URL为基准; 缓存仍以请求URL为键
        return FetchResult(url=final_url, body=body, from_cache=False)

    async def get(self, url: str) -> str:
        """获取页面内容"""
        return (await self.fetch(url)).body
