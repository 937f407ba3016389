"""Exception types raised by renamer.

All of these are precondition failures: they are raised before any file is
touched and abort the whole run. Per-file problems (unreadable headers, failed
renames) are never raised through these types.
"""


class RenamerError(Exception):
    """Base class for renamer errors."""

    pass


class ConfigError(RenamerError):
    """Raised when rename options are invalid."""

    pass


class ReplaceSpecError(ConfigError):
    """Raised when a ``--replace`` value is not a valid ``pattern=replacement``."""

    def __init__(self, spec: str, reason: str) -> None:
        """Initialize the error with the offending spec and a reason."""
        super().__init__(f"Invalid replace format: {spec!r} ({reason}), expected: old=new")
        self.spec = spec


class ProbeUnavailableError(RenamerError):
    """Raised when resolution detection is requested but ffprobe is missing."""

    def __init__(self, tool: str = "ffprobe") -> None:
        """Initialize the error with the name of the missing tool."""
        super().__init__(
            f"detect resolution flag is set, but {tool} is not installed. "
            "Please install it to use this feature"
        )
        self.tool = tool
