from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .webpush import WebPushConfig


class AppConfig(BaseSettings):
    """Root settings object.

    Environment variables use the ``PUSHFORGE_`` prefix and ``_`` as the
    nested delimiter, e.g. ``PUSHFORGE_WebPush_MaxPadding=0``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PUSHFORGE_",
        env_nested_delimiter="_",
        case_sensitive=False,
        extra="ignore",
    )

    WebPush: WebPushConfig = Field(default_factory=WebPushConfig)


configs = AppConfig()

__all__ = ["AppConfig", "WebPushConfig", "configs"]
