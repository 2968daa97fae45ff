from pathlib import Path
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BumpSettings(BaseSettings):
    ENV_PREFIX: ClassVar[str] = "KAC_BUMP_"
    DEFAULT_MANIFEST_FILENAME: ClassVar[str] = "package.json"
    DEFAULT_CHANGELOGS_DIR_NAME: ClassVar[str] = "changelogs"

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    root_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory holding the manifest and the changelogs directory.",
    )
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME
    changelogs_dir_name: str = Field(
        default=DEFAULT_CHANGELOGS_DIR_NAME,
        description="One {major}.{minor}.x.md file per version line is stored here.",
    )
    log_level: str = "WARNING"

    @property
    def manifest_path(self) -> Path:
        return self.root_dir / self.manifest_filename

    @property
    def changelogs_dir(self) -> Path:
        return self.root_dir / self.changelogs_dir_name
