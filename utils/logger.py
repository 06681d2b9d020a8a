"""
Logger Configuration
统一日志配置
"""
import logging

from rich.logging import RichHandler
from rich.console import Console


# 报告输出使用 stdout, 日志统一写入 stderr
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True)

# 日志格式 (时间/级别由 RichHandler 渲染)
LOG_FORMAT_SIMPLE = "%(message)s"

ROOT_LOGGER_NAME = "enrich_find"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别

    Returns:
        配置好的 Logger 实例
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 避免重复添加 handler, 仅更新级别
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    console_handler = RichHandler(
        console=err_console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    获取日志记录器

    Args:
        name: 日志记录器名称

    Returns:
        Logger 实例
    """
    logger = logging.getLogger(name)

    # 如果没有配置过，进行默认配置
    if not logger.handlers:
        return setup_logger(name)

    return logger


def configure_package_loggers(level: int = logging.INFO) -> None:
    """把各模块 (sources/orchestrator/render) 的日志挂到统一的 handler 上"""
    handler_owner = setup_logger(ROOT_LOGGER_NAME, level=level)
    for package in ("sources", "orchestrator", "render"):
        module_logger = logging.getLogger(package)
        module_logger.setLevel(level)
        module_logger.propagate = False
        module_logger.handlers = list(handler_owner.handlers)
