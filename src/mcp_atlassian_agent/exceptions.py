"""Exception types raised by the Atlassian agent tools."""


class MCPAtlassianError(Exception):
    """Base class for errors raised by this package."""


class MCPAtlassianAuthenticationError(MCPAtlassianError):
    """Raised when no usable access token can be resolved for an identity."""


class TenantResolutionError(MCPAtlassianError):
    """Raised when the accessible-resources lookup yields no usable site."""


class AtlassianApiError(MCPAtlassianError):
    """Raised when an Atlassian endpoint answers with a 4xx or 5xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Status: {status_code}, body: {body}")


class ConfluenceSearchError(MCPAtlassianError):
    """Raised by the CQL search tool, which propagates instead of reporting."""
