"""Exception hierarchy for cf-practice."""


class CFPracticeError(Exception):
    """Base class for all cf-practice errors."""


class ConfigError(CFPracticeError):
    """Configuration or credentials could not be loaded or saved."""


class WorkspaceError(CFPracticeError):
    """Workspace is missing, unreadable or structurally incomplete."""


class InvalidVersionError(CFPracticeError, ValueError):
    """Schema version string is malformed."""


class RemoteError(CFPracticeError):
    """Codeforces API or web request failed."""


class CheckCancelledError(CFPracticeError):
    """Check context was cancelled or its deadline passed."""
