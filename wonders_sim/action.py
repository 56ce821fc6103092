"""
What a player does each turn: build a structure, build a wonder stage, or
discard a card.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from .constants import BORROW_PRICE
from .cost import ProductionType
from .models import Card

@dataclass(frozen=True)
class Borrow:
    """
    One resource unit taken from a structure a neighbour has built.

    `index` is always 0, except for double producers (eg. Sawmill) where the
    second unit is 1.
    """
    card: Card
    index: int = 0

    def __post_init__(self):
        if self.index not in (0, 1):
            raise ValueError(f"Borrow index must be 0 or 1, got {self.index}")
        production = self.card.power.production if self.card.power else None
        if self.index == 1 and (production is None or production.type != ProductionType.DOUBLE):
            raise ValueError(f"Borrow index 1 is only valid for double producers, not {self.card.name}")

@dataclass(frozen=True)
class Borrowing:
    """Resources borrowed from the left and right neighbours for one action."""
    left: Tuple[Borrow, ...] = ()
    right: Tuple[Borrow, ...] = ()

    @classmethod
    def no_borrowing(cls) -> "Borrowing":
        return cls()

    def has_borrowing(self) -> bool:
        return bool(self.left or self.right)

    def count(self) -> int:
        return len(self.left) + len(self.right)

    def cost(self) -> int:
        """Coins the borrowing player pays in total."""
        return self.count() * BORROW_PRICE

    def valid(self, visible_game) -> bool:
        """True if every borrowed structure is on the stated neighbour's board."""
        def valid_on(borrows, neighbour) -> bool:
            return all(borrow.card in neighbour.built_cards for borrow in borrows)
        return (valid_on(self.left, visible_game.left_neighbour())
                and valid_on(self.right, visible_game.right_neighbour()))

    def __str__(self) -> str:
        parts = []
        if self.left:
            parts.append("left: " + ", ".join(b.card.name for b in self.left))
        if self.right:
            parts.append("right: " + ", ".join(b.card.name for b in self.right))
        return "; ".join(parts) if parts else "no borrowing"

class ActionType(Enum):
    BUILD = "build"
    WONDER = "wonder"
    DISCARD = "discard"

@dataclass(frozen=True)
class Action:
    type: ActionType
    card: Card
    borrowing: Optional[Borrowing] = None

    @classmethod
    def build(cls, card: Card, borrowing: Optional[Borrowing] = None) -> "Action":
        return cls(ActionType.BUILD, card, borrowing or Borrowing.no_borrowing())

    @classmethod
    def wonder(cls, card: Card, borrowing: Optional[Borrowing] = None) -> "Action":
        return cls(ActionType.WONDER, card, borrowing or Borrowing.no_borrowing())

    @classmethod
    def discard(cls, card: Card) -> "Action":
        return cls(ActionType.DISCARD, card)

    def __str__(self) -> str:
        if self.type == ActionType.BUILD:
            if self.borrowing.has_borrowing():
                return f"Build {self.card} (borrowing {self.borrowing}, {self.borrowing.cost()} coins)"
            return f"Build {self.card}"
        if self.type == ActionType.WONDER:
            return f"Use {self.card} to build a wonder stage"
        return f"Discard {self.card}"

@dataclass
class ActionOptions:
    """The possible ways of laying a particular card."""
    actions: List[Action] = field(default_factory=list)

    def possible(self) -> bool:
        return bool(self.actions)

    def own_cards_only(self) -> bool:
        """True if the card can be laid with the player's own resources (no borrowing)."""
        return (len(self.actions) == 1
                and self.actions[0].type == ActionType.BUILD
                and not self.actions[0].borrowing.has_borrowing())
