# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure the server can report belongs to one of these classes.
# The dispatch layer (core/dispatch.py) catches them at the tool boundary
# and turns them into text; only ConfigurationError is allowed to stop the
# process, and that happens before any tool is registered.
# =============================================================================


class IcePanelError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(IcePanelError):
    """A required setting (API key, organization ID) is missing."""


class InvalidArgument(IcePanelError):
    """A tool's arguments failed schema validation."""


class RemoteApiError(IcePanelError):
    """The IcePanel API answered with a non-2xx status.

    The body is kept as raw text; it is never parsed as JSON.
    """

    def __init__(self, status_code: int, status_text: str, body_text: str):
        self.status_code = status_code
        self.status_text = status_text
        self.body_text = body_text
        super().__init__(
            f"IcePanel API error: {status_code} {status_text} - {body_text}"
        )
