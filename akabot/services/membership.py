"""Membership gate — may the bot post into a channel?"""

from akabot.ports.outbound import MembershipLookup


class MembershipGate:
    """Reads cached membership; unknown channels fail closed.

    The cache is refreshed elsewhere on a fixed interval, so answers can be
    stale by up to that interval.
    """

    def __init__(self, lookup: MembershipLookup):
        self._lookup = lookup

    def check(self, channel_id: str) -> bool:
        record = self._lookup.get(channel_id)
        return bool(record and record.is_member)
