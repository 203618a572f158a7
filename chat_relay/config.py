"""
FastAPI application configuration module
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 加载.env文件,覆盖电脑自身环境变量
load_dotenv(override=True)


# 各上游的默认地址与默认模型
PROVIDER_DEFAULTS = {
    "zhipuai": {
        "api_url": "https://open.bigmodel.cn/api/paas/v4/chat/completions",
        "model": "glm-4.5-flash",
    },
    "openai": {
        "api_url": "https://api.openai.com/v1/chat/completions",
        "model": "gpt-4o-mini",
    },
}

AUTH_MODES = ("auto", "jwt", "raw")
LOG_LEVELS = ("false", "info", "debug")


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(extra="ignore")

    # Upstream Configuration
    AI_API_KEY: str = ""
    AI_API_URL: Optional[str] = None
    AI_MODEL: Optional[str] = None
    AI_PROVIDER: str = "zhipuai"

    # 鉴权方式: auto(智谱且为 id.secret 格式时签名), jwt(总是签名), raw(直接发送密钥)
    AI_AUTH_MODE: str = "auto"

    # 上游调用的整体超时（秒）
    AI_TIMEOUT: float = Field(default=30.0, gt=0)

    # 智谱默认关闭深度思考以避免超时，置空则不注入
    AI_THINKING_TYPE: str = "disabled"

    # Server Configuration
    LISTEN_PORT: int = 8080

    # Logging Configuration - 支持三个等级：false, info, debug
    LOG_LEVEL: str = "info"

    @field_validator("AI_PROVIDER")
    @classmethod
    def _check_provider(cls, value: str) -> str:
        value = (value or "").strip().lower()
        if value not in PROVIDER_DEFAULTS:
            raise ValueError(f"unsupported provider: {value}")
        return value

    @field_validator("AI_AUTH_MODE")
    @classmethod
    def _check_auth_mode(cls, value: str) -> str:
        value = (value or "").strip().lower()
        if value not in AUTH_MODES:
            raise ValueError(f"unsupported auth mode: {value}")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = (value or "").strip().lower()
        return value if value in LOG_LEVELS else "info"

    @property
    def api_url(self) -> str:
        return self.AI_API_URL or PROVIDER_DEFAULTS[self.AI_PROVIDER]["api_url"]

    @property
    def default_model(self) -> str:
        return self.AI_MODEL or PROVIDER_DEFAULTS[self.AI_PROVIDER]["model"]

    @property
    def should_sign(self) -> bool:
        """是否需要把 id.secret 形式的密钥签成令牌"""
        if self.AI_AUTH_MODE == "jwt":
            return True
        if self.AI_AUTH_MODE == "raw":
            return False
        return self.AI_PROVIDER == "zhipuai" and "." in self.AI_API_KEY


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
