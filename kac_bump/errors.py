from pathlib import Path


class KacBumpError(Exception):
    pass


class ManifestError(KacBumpError):
    def __init__(self, reason: str, path: Path) -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"Invalid project manifest @ {path}: {reason}")


class InvalidVersionError(KacBumpError):
    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"Version must have at least major.minor components, got: {version!r}"
        )


class InvalidChangeError(KacBumpError):
    """Raised by a release when it rejects a change entry."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ChangelogParseError(KacBumpError):
    def __init__(self, reason: str, line_number: int) -> None:
        self.reason = reason
        self.line_number = line_number
        super().__init__(f"Invalid changelog at line {line_number}: {reason}")


class ChangelogWriteError(KacBumpError):
    def __init__(self, reason: str, path: Path) -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"Error write file: {reason}")


class ChangelogReadError(KacBumpError):
    def __init__(self, reason: str, path: Path) -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"Error read file: {reason}")
