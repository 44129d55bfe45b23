"""Tool errors. Policy findings are never raised; only environment problems are."""


class SlimcheckError(Exception):
    """Base class for fatal slimcheck errors."""


class ParseError(SlimcheckError):
    """The build script could not be located or read."""

    def __init__(self, path, reason: str = "not found"):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Build script '{self.path}' {reason}.")


class ConfigError(SlimcheckError):
    """The configuration file is malformed."""


class ExclusionFileError(SlimcheckError):
    """The exclusion file exists but could not be read."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Exclusion file '{self.path}' {reason}.")
