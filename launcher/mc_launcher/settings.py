from __future__ import annotations
from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    mc_root: Path = Field(default=Path.home() / "mc-servers", alias="MC_ROOT")
    catalog_file: Optional[Path] = Field(default=None, alias="MC_CATALOG")

    java_binary: str = Field(default="java", alias="JAVA_BINARY")
    java_args: List[str] = Field(default_factory=list, alias="JAVA_ARGS")
    server_jar: str = Field(default="server.jar", alias="SERVER_JAR")

    download_timeout: float = Field(default=60.0, alias="DOWNLOAD_TIMEOUT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    def resolved_catalog_file(self) -> Path:
        return self.catalog_file if self.catalog_file else self.mc_root / "versions.json"
