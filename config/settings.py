"""
Settings Configuration
使用 Pydantic 进行配置验证和管理
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from utils.exceptions import ConfigurationError


# 截断描述至少保留一个字符加 "..."
MIN_DESCRIPTION_CHARS = 4


class SearchSettings(BaseSettings):
    """上游技能搜索命令配置"""
    command: str = Field(default="npx skills find", description="搜索命令 (查询词追加在末尾)")
    timeout: float = Field(default=60.0, description="搜索命令超时时间(秒)")

    class Config:
        env_prefix = "SKILLS_SEARCH_"


class SourceSettings(BaseSettings):
    """描述来源配置"""
    primary_url_template: str = Field(
        default="https://skills.sh/{owner}/{repo}/{skill}",
        description="主来源页面模板",
    )
    fallback_url_template: str = Field(
        default="https://skillsmp.com/skills/{owner}/{repo}/{skill}",
        description="备用来源页面模板",
    )
    user_agent: str = Field(default="enrich-find/1.0", description="User Agent")
    max_redirects: int = Field(default=3, description="最大跟随重定向次数")
    description_max_chars: int = Field(default=500, description="描述最大字符数 (含截断省略号)")

    class Config:
        env_prefix = "SKILLS_SOURCE_"

    @field_validator("max_redirects")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if int(value) < 0:
            raise ValueError("max_redirects must be >= 0")
        return int(value)

    @field_validator("description_max_chars")
    @classmethod
    def _room_for_ellipsis(cls, value: int) -> int:
        if int(value) < MIN_DESCRIPTION_CHARS:
            raise ValueError(f"description_max_chars must be >= {MIN_DESCRIPTION_CHARS}")
        return int(value)


class EnrichSettings(BaseSettings):
    """命令行选项默认值"""
    max_results: int = Field(default=10, description="最大补全结果数")
    timeout: int = Field(default=10, description="单次请求超时时间(秒)")
    concurrency: int = Field(default=5, description="最大并发请求数")

    class Config:
        env_prefix = "ENRICH_"


class Settings(BaseSettings):
    """主配置类 - 聚合所有子配置"""

    search: SearchSettings = Field(default_factory=SearchSettings)
    sources: SourceSettings = Field(default_factory=SourceSettings)
    enrich: EnrichSettings = Field(default_factory=EnrichSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """从指定的 .env 文件加载配置"""
        if env_path is None:
            # 默认查找 config/.env
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            search=SearchSettings(),
            sources=SourceSettings(),
            enrich=EnrichSettings(),
        )


def check_url_template(template: str, name: str = "url template") -> str:
    """
    校验来源 URL 模板

    只允许 {owner} / {repo} / {skill} 占位符, 且展开后必须是 http(s) 地址.

    Raises:
        ConfigurationError: 模板无法展开或不是 http(s) 地址
    """
    text = str(template or "").strip()
    try:
        sample = text.format(owner="owner", repo="repo", skill="skill")
    except (KeyError, IndexError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"invalid {name}: {template!r}", {"error": str(exc)}) from exc
    if not sample.startswith(("http://", "https://")):
        raise ConfigurationError(f"invalid {name}: {template!r} is not an http(s) URL")
    return text


@lru_cache()
def get_settings() -> Settings:
    """获取全局配置单例"""
    return Settings.load_from_env_file()


# 便捷访问
def get_search_settings() -> SearchSettings:
    return get_settings().search


def get_source_settings() -> SourceSettings:
    return get_settings().sources


def get_enrich_settings() -> EnrichSettings:
    return get_settings().enrich
