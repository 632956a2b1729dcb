from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["debug", "info", "warn", "error", "silent"]


class PageforgeConfig(BaseModel):
    source_dir: str = "."
    log_level: LogLevel = "info"
    log_format: Literal["text", "json"] = "text"
    page_pattern: str = Field(default="**/*", min_length=1)
