"""
Outbound Notification Module for AC Digest.

Delivers plain notices and rich pages to a Discord channel through the
Discord REST API.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List

import requests

from .batcher import NotificationPage
from .config import (
    DISCORD_API_BASE,
    DISCORD_EMBEDS_PER_MESSAGE,
    DISCORD_TIMEOUT,
    DISCORD_TOKEN,
)
from .difficulty import COLOR_ACCENTS
from .errors import NotificationError

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Interface for delivering digests to a destination channel."""

    @abstractmethod
    def send_text(self, channel: str, text: str) -> None:
        """Post a plain text message."""

    @abstractmethod
    def send_pages(self, channel: str, pages: List[NotificationPage]) -> None:
        """Post every page, in order."""


def page_to_embed(page: NotificationPage) -> Dict:
    """Convert a page to a Discord embed object."""
    return {
        "title": page.title,
        "url": page.url,
        "color": COLOR_ACCENTS[page.color],
        "fields": [
            {"name": name, "value": value, "inline": False}
            for name, value in page.fields
        ],
    }


class DiscordNotifier(Notifier):
    """
    Posts messages with a bot token.

    Discord caps a message at DISCORD_EMBEDS_PER_MESSAGE embeds, so one
    send_pages call may post several consecutive messages.
    """

    def __init__(
        self,
        token: str = DISCORD_TOKEN,
        api_base: str = DISCORD_API_BASE,
        timeout: float = DISCORD_TIMEOUT,
        session: requests.Session = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bot {token}",
            "Content-Type": "application/json",
        })

    def _post(self, channel: str, payload: Dict) -> None:
        url = f"{self.api_base}/channels/{channel}/messages"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Discord request failed: {e}")
            raise NotificationError("Discord request failed", str(e))

        if not response.ok:
            logger.error(f"Discord returned HTTP {response.status_code}: {response.text[:200]}")
            raise NotificationError(
                f"Discord returned HTTP {response.status_code}",
                response.text[:200]
            )

    def send_text(self, channel: str, text: str) -> None:
        logger.info(f"Sending notice to channel {channel}")
        self._post(channel, {"content": text})

    def send_pages(self, channel: str, pages: List[NotificationPage]) -> None:
        logger.info(f"Sending {len(pages)} pages to channel {channel}")
        embeds = [page_to_embed(p) for p in pages]
        for start in range(0, len(embeds), DISCORD_EMBEDS_PER_MESSAGE):
            self._post(channel, {"embeds": embeds[start:start + DISCORD_EMBEDS_PER_MESSAGE]})
