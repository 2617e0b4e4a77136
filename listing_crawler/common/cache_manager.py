import os
import time
import hashlib
import uuid
import logging
from typing import Optional

import aiofiles
import aiofiles.os

class PageCache:
    """页面缓存, 以URL的sha256作为文件名保存页面内容"""

    def __init__(self, cache_dir: str = "./cache", ttl: float = 3600, **kwargs):
        """初始化页面缓存

        Args:
            cache_dir: 缓存目录, 不存在时在首次写入时创建
            ttl: 缓存有效期(秒)
            **kwargs: 其他配置参数（将被忽略）
        """
        self.cache_dir = cache_dir
        self.ttl = ttl
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def url_hash(url: str) -> str:
        """计算URL的内容地址"""
        return hashlib.sha256(url.encode('utf-8')).hexdigest()

    def path_for(self, url: str) -> str:
        return os.path.join(self.cache_dir, self.url_hash(url))

    async def lookup(self, url: str) -> Optional[str]:
        """读取缓存

        Args:
            url: 请求URL

        Returns:
            Optional[str]: 缓存命中且未过期时返回页面内容, 否则返回None
        """
        file_name = self.path_for(url)
        try:
            file_stat = await aiofiles.os.stat(file_name)
        except FileNotFoundError:
            return None
        except OSError as e:
            self.logger.error(f"读取缓存状态失败 {file_name}: {str(e)}")
            return None

        # 过期文件不删除, 下次写入时整体覆盖
        if time.time() - file_stat.st_mtime >= self.ttl:
            self.logger.info(f"页面缓存已过期: {url}")
            return None

        try:
            async with aiofiles.open(file_name, 'rb') as f:
                content = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            self.logger.error(f"读取缓存失败 {file_name}: {str(e)}")
            return None

        try:
            return content.decode('utf-8')
        except UnicodeDecodeError as e:
            # 写入中断或外部写入导致内容损坏, 按未命中处理
            self.logger.error(f"缓存内容无法解码 {file_name}: {str(e)}")
            return None

    async def store(self, url: str, body: str) -> bool:
        """写入缓存

        Args:
            url: 请求URL
            body: 页面内容

        Returns:
            bool: 写入成功返回True, 失败返回False（不抛出异常）
        """
        file_name = self.path_for(url)
        # 先写临时文件再整体替换, 写入失败时不留下半个文件
        tmp_name = f"{file_name}.{uuid.uuid4().hex}.tmp"
        try:
            # 目录可能被其他进程同时创建
            await aiofiles.os.makedirs(self.cache_dir, exist_ok=True)
            async with aiofiles.open(tmp_name, 'wb') as f:
                await f.write(body.encode('utf-8'))
            await aiofiles.os.replace(tmp_name, file_name)
            self.logger.debug(f"缓存已保存到文件: {file_name}")
            return True
        except OSError as e:
            self.logger.error(f"保存缓存失败 {file_name}: {str(e)}")
            await self._discard(tmp_name)
            return False

    async def _discard(self, tmp_name: str):
        """删除写入失败的临时文件"""
        try:
            await aiofiles.os.remove(tmp_name)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"删除临时缓存文件失败 {tmp_name}: {str(e)}")
