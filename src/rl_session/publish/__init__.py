"""Report sinks: the local console and a Discord channel webhook."""

from rl_session.publish.console import ConsolePublisher
from rl_session.publish.protocol import Publisher
from rl_session.publish.webhook import DiscordWebhookPublisher

__all__ = ["ConsolePublisher", "DiscordWebhookPublisher", "Publisher"]
