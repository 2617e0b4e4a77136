from dataclasses import dataclass
from typing import Optional

@dataclass
class Listing:
    """车辆列表条目, 除标题外的字段都可能缺失"""
    title: str
    url: Optional[str] = None
    year: Optional[int] = None
    price: Optional[int] = None
    odometer: Optional[int] = None
    state: Optional[str] = None

    def to_text(self) -> str:
        """转换为文本格式"""
        text_parts = [
            f"Title: {self.title}",
            f"URL {self.url or ''}",
            f"Year: {_number(self.year, grouped=False)} "
            f"Price: {_number(self.price)} "
            f"Odometer: {_number(self.odometer)} "
            f"State: {self.state or ''}",
        ]
        return "\n".join(text_parts)

def _number(value: Optional[int], grouped: bool = True) -> str:
    if value is None:
        return "-"
    return f"{value:,}" if grouped else str(value)
