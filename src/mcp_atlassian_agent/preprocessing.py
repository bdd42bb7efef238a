"""Conversion of Confluence storage-format XHTML into agent-readable text."""

import logging
import re

from bs4 import BeautifulSoup, Tag
from markdownify import markdownify as md

logger = logging.getLogger("mcp-atlassian-agent.preprocessing")

_BLANK_LINES = re.compile(r"\n{3,}")


class ConfluencePreprocessor:
    """Handles text preprocessing for Confluence page bodies."""

    def html_to_summary(self, html_content: str) -> str:
        """
        Turn a storage-format body into compact markdown.

        User mentions become ``@user_<accountId>``, macro parameters are
        dropped, code macro bodies are kept, and runs of blank lines are
        collapsed.

        Args:
            html_content: The ``body.storage.value`` of a page

        Returns:
            Markdown text, or an empty string for an empty body
        """
        if not html_content or not html_content.strip():
            return ""

        soup = BeautifulSoup(html_content, "html.parser")
        self._process_user_mentions_in_soup(soup)
        self._strip_macro_parameters(soup)
        self._unwrap_plain_text_bodies(soup)

        markdown = md(str(soup), heading_style="ATX", escape_underscores=False)
        return _BLANK_LINES.sub("\n\n", markdown).strip()

    def _process_user_mentions_in_soup(self, soup: BeautifulSoup) -> None:
        for link in soup.find_all("ac:link"):
            user_ref = link.find("ri:user")
            if not isinstance(user_ref, Tag):
                continue
            account_id = user_ref.get("ri:account-id")
            if isinstance(account_id, str) and account_id:
                link.replace_with(f"@user_{account_id}")

    def _strip_macro_parameters(self, soup: BeautifulSoup) -> None:
        for parameter in soup.find_all("ac:parameter"):
            parameter.decompose()

    def _unwrap_plain_text_bodies(self, soup: BeautifulSoup) -> None:
        # Code macros keep their source in CDATA inside ac:plain-text-body
        for body in soup.find_all("ac:plain-text-body"):
            code = soup.new_tag("pre")
            code.string = body.get_text()
            body.replace_with(code)
