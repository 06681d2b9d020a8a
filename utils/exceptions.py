"""
Custom Exceptions
自定义异常类

只有配置和运行环境类错误会作为异常抛出; 单条结果的网络/解析失败
以数据形式记录在 FetchOutcome / DescriptionResult 中.
"""
from typing import Optional


class EnrichFindError(Exception):
    """基础异常类"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(EnrichFindError):
    """配置错误"""
    pass


class SearchCommandError(EnrichFindError):
    """上游搜索命令执行失败"""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        **kwargs,
    ):
        super().__init__(message, kwargs)
        self.returncode = returncode
        self.stderr = stderr


class SearchCommandUnavailableError(SearchCommandError):
    """上游搜索命令不存在"""
    pass
