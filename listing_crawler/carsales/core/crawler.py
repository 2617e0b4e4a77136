import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ...common.page_source import PageSource
from .listing import Listing
from .parser import ListingParser

@dataclass
class CrawlState:
    """爬取状态, 只由 ListingCrawler 修改"""
    next_url: Optional[str]
    listings: List[Listing] = field(default_factory=list)
    pages_fetched: int = 0

class ListingCrawler:
    """按"下一页"链接顺序爬取搜索结果"""

    def __init__(
            self,
            page_source: PageSource,
            parser: ListingParser,
            max_pages: Optional[int] = None):
        """
        初始化爬虫

        :param page_source: 页面来源（缓存 + 下载器）
        :param parser: 搜索结果页解析器
        :param max_pages: 最多爬取的页数, None 表示不限制
        """
        if max_pages is not None and max_pages < 0:
            raise ValueError(f"max_pages 不能为负数: {max_pages}")
        self.page_source = page_source
        self.parser = parser
        self.max_pages = max_pages
        self.logger = logging.getLogger(__name__)

    def need_more(self, state: CrawlState) -> bool:
        if state.next_url is None:
            return False
        if self.max_pages is not None and state.pages_fetched >= self.max_pages:
            self.logger.warning(f"已达到最大页数 {self.max_pages}, 停止爬取, 未爬取: {state.next_url}")
            return False
        return True

    async def crawl(self, start_url: str) -> List[Listing]:
        """
        从起始URL开始逐页爬取, 直到页面没有下一页链接

        下载或解析出错时异常直接抛出, 已爬取的结果由调用方决定是否丢弃。
        """
        state = CrawlState(next_url=start_url)

        while self.need_more(state):
            page_url = state.next_url
            result = await self.page_source.fetch(page_url)
            state.pages_fetched += 1

            # 相对链接以当前页面URL为基准解析
            page_listings, state.next_url = self.parser.extract(result.body, result.url)
            state.listings.extend(page_listings)

            self.logger.info(
                f"第 {state.pages_fetched} 页{'(缓存)' if result.from_cache else ''}: "
                f"{len(page_listings)} 条, 累计 {len(state.listings)} 条"
            )

        self.logger.info(f"爬取完成, 共 {state.pages_fetched} 页, {len(state.listings)} 条")
        return state.listings
