from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """
    Options threaded through a single diff invocation.
    Values come from init kwargs, then CONTRACTDIFF_* env vars, then .env.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTRACTDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    exclude_description: bool = False
    exclude_examples: bool = False
    path_filter: Optional[str] = None
