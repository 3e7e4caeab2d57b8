"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing policy configuration."""

    error_code = "CONFIG_ERROR"


class MissingInputError(PipelineError):
    """Raised when the input feature collection file does not exist."""

    error_code = "INPUT_MISSING"


class MalformedInputError(PipelineError):
    """Raised when the input cannot be decoded as a feature collection."""

    error_code = "INPUT_MALFORMED"


class OutputError(PipelineError):
    """Raised when the road table cannot be written."""

    error_code = "OUTPUT_ERROR"
