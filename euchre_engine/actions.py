"""
Player and flow actions accepted by the game reducer.

``position`` is optional on seat actions; when given it must match the
seat whose turn it is.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .card import Card, Suit


@dataclass(frozen=True)
class OrderUp:
    position: Optional[int] = None


@dataclass(frozen=True)
class Pass:
    position: Optional[int] = None


@dataclass(frozen=True)
class PickSuit:
    suit: Suit
    position: Optional[int] = None


@dataclass(frozen=True)
class DecideGoAlone:
    alone: bool
    position: Optional[int] = None


@dataclass(frozen=True)
class Discard:
    card: Card
    position: Optional[int] = None


@dataclass(frozen=True)
class PlayCard:
    card: Card
    position: Optional[int] = None


@dataclass(frozen=True)
class Advance:
    """Move past a phase that needs no player input"""


Action = Union[OrderUp, Pass, PickSuit, DecideGoAlone, Discard, PlayCard, Advance]
