"""Slack (chat platform) adapters."""

from akabot.adapters.slack.channels import ChannelSync
from akabot.adapters.slack.delivery import SlackDelivery, SlackDeliveryError

__all__ = ["ChannelSync", "SlackDelivery", "SlackDeliveryError"]
