import re
import logging
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from selectolax.parser import HTMLParser, Node

from ..config.settings import SELECTORS, ODOMETER_FEATURE
from .listing import Listing

class ListingParser:
    """搜索结果页解析器

    extract 是纯函数: 输入页面HTML和页面URL, 输出本页条目和下一页URL,
    不保存任何状态。
    """

    YEAR_PATTERN = re.compile(r'^(\d{4})')
    INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')
    PRICE_STRIP = re.compile(r'[$,*]')
    ODOMETER_STRIP = re.compile(r',| km')

    def __init__(self, selectors: Optional[dict] = None):
        self.selectors = {**SELECTORS, **(selectors or {})}
        self.logger = logging.getLogger(__name__)

    def extract(self, html: str, base_url: str) -> Tuple[List[Listing], Optional[str]]:
        """
        解析一页搜索结果

        Args:
            html: 页面HTML
            base_url: 当前页面URL, 用于解析相对链接

        Returns:
            Tuple[List[Listing], Optional[str]]: 本页条目（按页面顺序）和下一页的绝对URL
        """
        tree = HTMLParser(html)

        listings = []
        for item in tree.css(self.selectors['item']):
            if listing := self.parse_item(item, base_url):
                listings.append(listing)

        next_url = None
        if (next_link := tree.css_first(self.selectors['next'])) is not None:
            if href := (next_link.attributes.get('href') or '').strip():
                next_url = urljoin(base_url, href)
                self.logger.info(f"下一页: {next_url}")

        return listings, next_url

    def parse_item(self, item: Node, base_url: str) -> Optional[Listing]:
        """解析单个条目, 没有标题时返回None"""
        title = None
        url = None
        year = None
        if (heading := item.css_first(self.selectors['title'])) is not None:
            title = heading.text(deep=False, strip=True)
            if (anchor := self._enclosing_anchor(heading)) is not None:
                if href := anchor.attributes.get('href'):
                    url = urljoin(base_url, href.strip())
            if title and (match := self.YEAR_PATTERN.match(title)):
                year = int(match.group(1))

        if not title:
            return None

        price = None
        if (price_elem := item.css_first(self.selectors['price'])) is not None:
            price = self.parse_int(self.PRICE_STRIP.sub('', price_elem.text(strip=True)))

        odometer = None
        for feature in item.css(self.selectors['feature_title']):
            if feature.text(strip=True) != ODOMETER_FEATURE or feature.parent is None:
                continue
            if (value := feature.parent.css_first(self.selectors['feature_text'])) is not None:
                odometer = self.parse_int(self.ODOMETER_STRIP.sub('', value.text(strip=True)))

        state = None
        if (state_elem := item.css_first(self.selectors['state'])) is not None:
            state = state_elem.text(strip=True) or None

        return Listing(
            title=title,
            url=url,
            year=year,
            price=price,
            odometer=odometer,
            state=state
        )

    @classmethod
    def parse_int(cls, text: str) -> Optional[int]:
        """取文本开头的整数, 无法解析时返回None"""
        if match := cls.INT_PATTERN.match(text or ''):
            return int(match.group(1))
        return None

    @staticmethod
    def _enclosing_anchor(node: Node) -> Optional[Node]:
        parent = node.parent
        while parent is not None:
            if parent.tag == 'a':
                return parent
            parent = parent.parent
        return None
