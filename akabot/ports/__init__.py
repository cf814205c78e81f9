"""Port interfaces (Hexagonal Architecture)."""

from akabot.ports.inbound import CommandMeta, InboundCommand
from akabot.ports.outbound import AppsPort, DeliveryPort, MembershipLookup, MembershipWriter, UserDirectory

__all__ = [
    "CommandMeta",
    "InboundCommand",
    "AppsPort",
    "DeliveryPort",
    "MembershipLookup",
    "MembershipWriter",
    "UserDirectory",
]
