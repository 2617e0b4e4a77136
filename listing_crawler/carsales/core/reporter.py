from typing import List, Optional

from .listing import Listing

CSV_HEADER = ['Odometer', 'Price', 'Year', 'State', 'Title', 'URL']

def _quote(value: Optional[str]) -> str:
    return '"{}"'.format((value or '').replace('"', '""'))

def _plain(value) -> str:
    return '' if value is None else str(value)

def format_csv(listings: List[Listing]) -> str:
    """
    生成CSV, 数值和州不加引号, 标题和URL加双引号

    Returns:
        str: 以换行分隔的CSV文本, 末尾不带换行
    """
    lines = [','.join(CSV_HEADER)]
    for listing in listings:
        lines.append(','.join([
            _plain(listing.odometer),
            _plain(listing.price),
            _plain(listing.year),
            _plain(listing.state),
            _quote(listing.title),
            _quote(listing.url),
        ]))
    return '\n'.join(lines)

def format_display(listings: List[Listing]) -> str:
    """生成便于阅读的文本, 每个条目之间空一行"""
    return ''.join(f"{listing.to_text()}\n\n" for listing in listings)

def render(listings: List[Listing], output_format: str = 'csv') -> str:
    if output_format == 'csv':
        return format_csv(listings)
    if output_format == 'text':
        return format_display(listings)
    raise ValueError(f"不支持的输出格式: {output_format}")
