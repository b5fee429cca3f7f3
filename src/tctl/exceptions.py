"""tctl exception hierarchy.

All public exceptions inherit from TctlError, giving callers a single
base class to catch when they want to handle any tctl-specific failure
without swallowing unrelated errors.

"Not found" conditions (no docstring, no ``@tool`` tag, unknown tool or
artifact) are never exceptions. They surface as ``None`` or a failed
result so a single bad file cannot abort a scan.
"""


class TctlError(Exception):
    """Base exception for all tctl errors."""


class ParseError(TctlError):
    """Raised when a tool source file cannot be read or decoded.

    Malformed tag lines do not raise; they degrade to missing fields.
    This covers only I/O and encoding failures on the file itself.
    """


class ConfigError(TctlError):
    """Raised when the configuration directory cannot be read or written.

    Covers malformed YAML in ``sources.yaml``/``settings.yaml``, invalid
    source registrations, and failures persisting the source list.
    """


class ExecutionError(TctlError):
    """Raised (or returned inside a ``RunResult``) when a tool cannot be launched."""


class InterpreterNotFoundError(ExecutionError):
    """No interpreter for the tool's language could be located on PATH."""

    def __init__(self, interpreter: str = "python") -> None:
        super().__init__(f"{interpreter} interpreter not found")
        self.interpreter = interpreter


class UnsupportedLanguageError(ExecutionError):
    """No registered runner accepts the tool's language."""

    def __init__(self, language: str) -> None:
        super().__init__(f"unsupported language: {language}")
        self.language = language
