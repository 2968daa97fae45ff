import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from kac_bump.errors import ManifestError

logger = logging.getLogger(__name__)


class PackageManifest(BaseModel):
    """The subset of a `package.json` we read, other fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    version: str

    @field_validator("version")
    @classmethod
    def check_version(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("version is empty")
        return value


def read_manifest(path: Path) -> PackageManifest:
    if not path.exists():
        raise ManifestError("file not found", path)
    try:
        return PackageManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ManifestError(str(e), path) from e


def read_version(path: Path) -> str:
    version = read_manifest(path).version
    logger.debug(f"read version {version} from {path}")
    return version
