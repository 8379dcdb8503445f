"""AuthRedirect - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失 SECRET_KEY 会直接抛出 ValueError.
"""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authredirect.constants import DEFAULT_PROXY_PREFIX, RedirectSource

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "0.3.0"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TRUSTED_PROXY_IPS = ("127.0.0.1", "::1")

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # `TRUSTED_PROXY_IPS` / `WHITELIST_DOMAINS` / `REDIRECT_STRATEGIES` 约定使用逗号分隔,
        # 关闭自动 JSON 解码,统一交由 field_validator 解析(同时兼容 JSON 数组)。
        enable_decoding=False,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="AuthRedirect", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    proxy_prefix: str = Field(default=DEFAULT_PROXY_PREFIX, validation_alias="PROXY_PREFIX")
    reverse_proxy: bool = Field(default=False, validation_alias="REVERSE_PROXY")
    trusted_proxy_ips: tuple[str, ...] = Field(
        default=DEFAULT_TRUSTED_PROXY_IPS,
        validation_alias="TRUSTED_PROXY_IPS",
    )
    whitelist_domains: tuple[str, ...] = Field(default=(), validation_alias="WHITELIST_DOMAINS")
    redirect_strategies: tuple[str, ...] = Field(default=(), validation_alias="REDIRECT_STRATEGIES")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")

    @field_validator("trusted_proxy_ips", "whitelist_domains", "redirect_strategies", mode="before")
    @classmethod
    def _parse_csv_values(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return ()
            if raw.startswith("["):
                parsed = json.loads(raw)
                if not isinstance(parsed, list):
                    raise ValueError("must be a JSON array or a comma-separated string")
                return tuple(item for item in (str(v).strip() for v in parsed) if item)
            return _parse_csv(raw)
        if isinstance(value, (list, tuple, set)):
            items = []
            for item in value:
                text = str(item).strip()
                if text:
                    items.append(text)
            return tuple(items)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("proxy_prefix")
    @classmethod
    def _normalize_proxy_prefix(cls, value: str) -> str:
        stripped = value.rstrip("/")
        return stripped or value

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def redirect_sources(self) -> tuple[RedirectSource, ...]:
        """显式配置的跳转策略顺序,未配置时返回空元组."""
        return tuple(RedirectSource(item) for item in self.redirect_strategies)

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "PROXY_PREFIX": self.proxy_prefix,
            "REVERSE_PROXY": self.reverse_proxy,
            "TRUSTED_PROXY_IPS": ",".join(self.trusted_proxy_ips),
            "WHITELIST_DOMAINS": ",".join(self.whitelist_domains),
            "REDIRECT_STRATEGIES": ",".join(self.redirect_strategies),
            "LOG_LEVEL": self.log_level,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        errors: list[str] = []
        known_sources = {source.value for source in RedirectSource}
        unknown_sources = [item for item in self.redirect_strategies if item not in known_sources]
        checks: list[tuple[str, bool]] = [
            ("PROXY_PREFIX 必须以 / 开头", not self.proxy_prefix.startswith("/")),
            ("PROXY_PREFIX 不能为根路径 /", self.proxy_prefix == "/"),
            (
                f"REDIRECT_STRATEGIES 包含未知策略: {','.join(unknown_sources)}",
                bool(unknown_sources),
            ),
            (
                f"LOG_LEVEL 仅支持 {'/'.join(sorted(_LOG_LEVELS))}",
                self.log_level not in _LOG_LEVELS,
            ),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)
        if errors:
            raise ValueError("; ".join(errors))
