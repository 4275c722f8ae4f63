from pydantic import BaseModel, Field
from typing import Literal


class IgnoreConfig(BaseModel):
    global_file: str | None = None
    local_filename: str = ".repoignore"


class WalkerConfig(BaseModel):
    max_concurrency: int | None = Field(default=None, ge=1)


class StorageConfig(BaseModel):
    paths_file: str = "~/.freepo/user-data.json"
    selection_file: str = "~/.freepo/selection.json"


class ReportConfig(BaseModel):
    command: list[str] | None = None
    timeout: int = Field(default=120, gt=0)


class FreepoConfig(BaseModel):
    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)
    walker: WalkerConfig = Field(default_factory=WalkerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
