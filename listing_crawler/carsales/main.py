import sys
import asyncio
import logging
import logging.config
import argparse
from typing import List, Optional

from listing_crawler.config.settings import CACHE_CONFIG, DOWNLOADER_CONFIG, LOGGING
from listing_crawler.carsales.config.settings import START_URL, MAX_PAGES, OUTPUT_FORMAT
from listing_crawler.common.cache_manager import PageCache
from listing_crawler.common.downloader import Downloader
from listing_crawler.common.page_source import PageSource
from listing_crawler.carsales.core.crawler import ListingCrawler
from listing_crawler.carsales.core.parser import ListingParser
from listing_crawler.carsales.core.reporter import render

logger = logging.getLogger(__name__)

def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"不能为负数: {value}")
    return number

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="爬取 carsales 搜索结果并输出车辆列表")
    parser.add_argument('url', nargs='?', default=START_URL, help="搜索结果页URL")
    parser.add_argument('--format', dest='output_format', choices=['csv', 'text'],
                        default=OUTPUT_FORMAT, help="输出格式")
    parser.add_argument('--max-pages', type=non_negative_int, default=MAX_PAGES,
                        help="最多爬取的页数, 0 表示不限制")
    parser.add_argument('--cache-dir', default=CACHE_CONFIG['cache_dir'], help="页面缓存目录")
    parser.add_argument('-v', '--verbose', action='store_true', help="输出调试日志")
    return parser.parse_args(argv)

async def run(args: argparse.Namespace) -> str:
    """执行一次完整爬取, 返回渲染后的结果"""
    cache = PageCache(**{**CACHE_CONFIG, 'cache_dir': args.cache_dir})
    async with Downloader(**DOWNLOADER_CONFIG) as downloader:
        crawler = ListingCrawler(
            page_source=PageSource(cache, downloader),
            parser=ListingParser(),
            max_pages=args.max_pages or None
        )
        listings = await crawler.crawl(args.url)
    return render(listings, args.output_format)

def main(argv: Optional[List[str]] = None) -> int:
    """程序入口"""
    args = parse_args(argv)
    logging.config.dictConfig(LOGGING)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info(f"开始爬取: {args.url}")
    try:
        output = asyncio.run(run(args))
    except Exception as e:
        # 出错时不输出部分结果
        logger.error(f"爬取失败: {str(e)}", exc_info=True)
        return 1

    print(output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
