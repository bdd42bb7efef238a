from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_atlassian_agent.config import AtlassianConfig
    from mcp_atlassian_agent.fetcher import AtlassianFetcher
    from mcp_atlassian_agent.tokens import TokenManager


@dataclass(frozen=True)
class MainAppContext:
    """
    Process-wide state created once at server startup.

    ``fetcher`` owns the single HTTP session shared by every tool call;
    ``token_manager`` resolves identities for requests that do not bring
    their own bearer token.
    """

    config: AtlassianConfig | None = None
    fetcher: AtlassianFetcher | None = None
    token_manager: TokenManager | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
