"""Custom exceptions for swresolve."""


class ResolverError(Exception):
    """Base exception for all resolution errors."""


class ConfigurationError(ResolverError):
    """Raised when configuration is invalid."""


class MissingFlagError(ResolverError):
    """Raised when neither flag of a required id/name pair was given."""

    def __init__(self, *flags: str) -> None:
        self.flags = flags
        alternatives = " or ".join(f'"--{flag}"' for flag in flags)
        super().__init__(f"either flags {alternatives} must be given")


class FormatError(ResolverError):
    """Raised when an identifier does not have the expected structure."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class DecodeError(ResolverError):
    """Raised when the encoded part of an identifier is not valid base64."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class MissingDependencyError(ResolverError):
    """Raised when a name is given but the service id it depends on is not."""

    def __init__(self, flag: str) -> None:
        self.flag = flag
        super().__init__(
            f'"--{flag}" is specified but its related service name or id is not given'
        )


class WriteError(ResolverError):
    """Raised when the flag context rejects a write-back."""

    def __init__(self, flag: str, reason: str | None = None) -> None:
        self.flag = flag
        message = f'cannot set flag "--{flag}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
