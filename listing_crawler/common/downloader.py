import logging
import random
import asyncio
import httpx
from typing import Optional, Dict, Tuple

class DownloaderError(Exception):
    """下载错误"""
    pass

class NetworkError(DownloaderError):
    """网络错误"""
    pass

class FetchTimeoutError(NetworkError):
    """重试次数用尽后仍然超时"""
    pass

class BadStatusError(DownloaderError):
    """响应状态码不是200"""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"HTTP错误 {status_code}: {url}")
        self.url = url
        self.status_code = status_code

class Downloader:
    """异步下载器"""

    def __init__(
            self,
            retry_times: int = 3,
            retry_interval: float = 0,
            timeout: float = 30,
            headers: Optional[Dict[str, str]] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
            **kwargs):
        """初始化下载器

        Args:
            retry_times: 超时后的重试次数, 总请求次数为 retry_times + 1
            retry_interval: 重试间隔（秒）, 按指数退避增长
            timeout: 单次请求超时时间（秒）
            headers: 额外的请求头
            transport: 自定义传输层（测试时传入 httpx.MockTransport）
            **kwargs: 其他配置参数（将被忽略）
        """
        if retry_times < 0:
            raise ValueError(f"retry_times 不能为负数: {retry_times}")
        if timeout <= 0:
            raise ValueError(f"timeout 必须大于0: {timeout}")
        self.retry_times = retry_times
        self.retry_interval = retry_interval
        self.timeout = timeout
        self.transport = transport
        self.session: Optional[httpx.AsyncClient] = None
        self.logger = logging.getLogger(__name__)

        # 默认请求头
        self.headers = {
            'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
            'Accept-Language': 'en-AU,en;q=0.9',
        }
        if headers:
            self.headers.update(headers)

        # 超时配置
        self.timeout_config = httpx.Timeout(
            connect=timeout,
            read=timeout,
            write=timeout,
            pool=timeout
        )

    async def get_session(self) -> httpx.AsyncClient:
        """获取或创建会话"""
        if self.session is None or self.session.is_closed:
            self.session = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout_config,
                follow_redirects=True,
                transport=self.transport
            )
        return self.session

    async def close(self):
        """关闭会话"""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            self.session = None

    async def get(self, url: str) -> str:
        """发送GET请求并返回页面文本"""
        _, text = await self.fetch(url)
        return text

    async def fetch(self, url: str) -> Tuple[str, str]:
        """发送GET请求, 返回跳转后的最终URL和页面文本

        timeout 限制整次请求（包括读取响应体）的耗时, 而不只是单次读写。
        只有超时会重试; 其他网络错误和非200状态码立即抛出。

        Args:
            url: 请求URL

        Returns:
            Tuple[str, str]: 最终URL和响应文本

        Raises:
            FetchTimeoutError: 重试次数用尽后仍然超时
            NetworkError: 其他网络错误
            BadStatusError: 状态码不是200
        """
        attempts = self.retry_times + 1
        for attempt in range(attempts):
            session = await self.get_session()
            try:
                response = await asyncio.wait_for(session.get(url), self.timeout)
            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                if attempt >= self.retry_times:
                    self.logger.error(f"连接超时, 没有剩余重试次数 (尝试 {attempt + 1}/{attempts}): {url}")
                    raise FetchTimeoutError(f"连接超时: {url}") from e
                self.logger.warning(f"连接超时, 重试 (尝试 {attempt + 1}/{attempts}): {url}")
            except httpx.HTTPError as e:
                raise NetworkError(f"请求失败: {url} - {str(e)}") from e
            else:
                if response.status_code != 200:
                    raise BadStatusError(url, response.status_code)
                return str(response.url), response.text

            # 重试延迟（指数退避 + 随机因子）
            if self.retry_interval > 0:
                delay = self.retry_interval * (2 ** attempt) + random.uniform(0.1, 1.0)
                await asyncio.sleep(delay)

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
