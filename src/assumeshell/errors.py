class AssumeShellError(Exception):
    """Base class for every error the CLI reports and exits on."""

    exit_code = 1


class ConfigError(AssumeShellError):
    """The AWS config file is missing, unreadable or malformed."""


class ProfileNotFound(AssumeShellError):
    def __init__(self, name: str):
        super().__init__(f"Profile '{name}' not found in AWS config")
        self.name = name


class RemoteServiceError(AssumeShellError):
    """An STS call failed. The message never carries credential values."""

    def __init__(self, operation: str, profile: str | None, detail: str):
        target = f" for profile '{profile}'" if profile else ""
        super().__init__(f"{operation} failed{target}: {detail}")
        self.operation = operation
        self.profile = profile
        self.detail = detail


class SpawnError(AssumeShellError):
    """The interactive shell could not be started."""


class SelectionCancelled(AssumeShellError):
    """The user backed out of an interactive prompt. Not a failure."""

    exit_code = 0
