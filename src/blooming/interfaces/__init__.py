"""Protocols implemented by blooming components."""

from .bit_array import BitStore
from .bloom import MembershipFilter

__all__ = ["BitStore", "MembershipFilter"]
