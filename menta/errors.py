"""Error taxonomy for a triage run."""


class MentaError(Exception):
    """Base class for every failure the CLI turns into a non-zero exit."""


class UsageError(MentaError):
    """Missing or invalid command-line arguments."""


class ConfigurationError(MentaError):
    """Config file unreadable, malformed, or missing the requested command."""


class FetchError(MentaError):
    """Reading the issue or the repository contents failed."""


class CompletionError(MentaError):
    """The completion service request failed or returned an unusable payload."""


class PostError(MentaError):
    """Writing the result comment back to the issue failed."""
