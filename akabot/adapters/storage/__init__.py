"""Storage adapters."""

from akabot.adapters.storage.membership_store import JsonMembershipStore

__all__ = ["JsonMembershipStore"]
