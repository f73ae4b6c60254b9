"""
Unified exception definitions
"""


class HostkitError(Exception):
    """Base exception class"""
    pass


class ConfigError(HostkitError):
    """Configuration error"""
    pass


# ============================================================
# Precheck failures
# ============================================================

class PrecheckError(HostkitError):
    """A precondition for running was not met"""
    pass


class PrivilegeError(PrecheckError):
    """Elevated privilege is required"""
    pass


class MissingFileError(PrecheckError):
    """A required file does not exist"""
    pass


# ============================================================
# Validation failures
# ============================================================

class ValidationError(HostkitError):
    """User input was rejected"""
    pass


class InvalidHostnameError(ValidationError):
    """Hostname or FQDN is malformed"""
    pass


class KeySourceConflictError(ValidationError):
    """More than one key source was selected"""
    pass


class EmptyKeySetError(ValidationError):
    """Key source produced no valid public keys"""
    pass


class UnknownUserError(ValidationError):
    """Target account does not exist"""
    pass


# ============================================================
# Environment failures
# ============================================================

class HostEnvironmentError(HostkitError):
    """The host environment cannot carry out the operation"""
    pass


class UnsupportedPlatformError(HostEnvironmentError):
    """Unknown OS family or package manager"""
    pass


class KeyFetchError(HostEnvironmentError):
    """Public keys could not be read from their source"""
    pass


class SshdConfigError(HostEnvironmentError):
    """sshd rejected the patched configuration"""
    pass
