"""
What a card does for its owner once built.

Powers are a closed set of kinds, each parsed from the "effect" entry of the
reference data, so the resolver and the scoring code can handle every kind
explicitly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple
from .constants import CardColor, ScienceSymbol
from .cost import Production

class PowerType(Enum):
    PURCHASABLE_PRODUCER = "purchasable_producer"   # brown and grey cards
    PRODUCER = "producer"                           # yellow cards, owner only
    VICTORY_POINTS = "victory_points"
    COINS = "coins"
    BUY_BROWN_ANTICLOCKWISE = "buy_brown_anticlockwise"
    BUY_BROWN_CLOCKWISE = "buy_brown_clockwise"
    BUY_GREY = "buy_grey"
    SCIENCE = "science"
    SHIELDS = "shields"
    PER_ITEM_REWARDS = "per_item_rewards"

class CountableItem(Enum):
    CARD = "card"
    DEFEAT_TOKEN = "defeat_token"
    WONDER_STAGE = "wonder_stage"

_TARGETS = {
    "self": (True, False),
    "neighbors": (False, True),
    "neighbors_and_self": (True, True),
}

@dataclass(frozen=True)
class PerItemReward:
    """
    Coins and/or points for every matching item owned by the player and/or
    their neighbours, eg. one point per brown card the neighbours have built.
    """
    item: CountableItem
    colors: Tuple[CardColor, ...] = ()
    me: bool = True
    neighbours: bool = False
    coins_per_thing: int = 0
    points_per_thing: int = 0

    @classmethod
    def from_dict(cls, data: Dict) -> "PerItemReward":
        target = data.get("target", "self")
        if target not in _TARGETS:
            raise ValueError(f"Unknown reward target '{target}'")
        me, neighbours = _TARGETS[target]
        return cls(
            item=CountableItem(data.get("item", "card")),
            colors=tuple(CardColor(c) for c in data.get("colors", [])),
            me=me,
            neighbours=neighbours,
            coins_per_thing=data.get("coins", 0),
            points_per_thing=data.get("vp", 0),
        )

    def matches_card(self, card) -> bool:
        return self.item == CountableItem.CARD and card.color in self.colors

    def __str__(self) -> str:
        if self.item == CountableItem.CARD:
            thing = "/".join(c.value for c in self.colors) + " card"
        else:
            thing = self.item.value.replace("_", " ")
        whose = {(True, False): "own", (False, True): "neighbours'", (True, True): "own and neighbours'"}
        rewards = []
        if self.coins_per_thing:
            rewards.append(f"{self.coins_per_thing} coins")
        if self.points_per_thing:
            rewards.append(f"{self.points_per_thing} VP")
        return f"{' + '.join(rewards)} per {whose[(self.me, self.neighbours)]} {thing}"

@dataclass(frozen=True)
class Power:
    type: PowerType
    production: Optional[Production] = None
    amount: int = 0
    science: Tuple[ScienceSymbol, ...] = ()
    rewards: Tuple[PerItemReward, ...] = ()

    @classmethod
    def from_effect(cls, color: CardColor, effect: Dict) -> "Power":
        """Convert a reference-data effect into a power."""
        if "production" in effect or "production_choice" in effect:
            production = Production.from_effect(effect)
            if color in (CardColor.BROWN, CardColor.GREY):
                return cls(PowerType.PURCHASABLE_PRODUCER, production=production)
            return cls(PowerType.PRODUCER, production=production)
        if "vp" in effect:
            return cls(PowerType.VICTORY_POINTS, amount=effect["vp"])
        if "coins" in effect:
            return cls(PowerType.COINS, amount=effect["coins"])
        if "shield" in effect:
            return cls(PowerType.SHIELDS, amount=effect["shield"])
        if "science" in effect:
            return cls(PowerType.SCIENCE, science=tuple(ScienceSymbol(s) for s in effect["science"]))
        if "trading" in effect:
            trading = effect["trading"]
            if trading["resources"] == "manufactured":
                return cls(PowerType.BUY_GREY)
            if trading["direction"] == "clockwise":
                return cls(PowerType.BUY_BROWN_CLOCKWISE)
            return cls(PowerType.BUY_BROWN_ANTICLOCKWISE)
        if "per_item" in effect:
            return cls(PowerType.PER_ITEM_REWARDS,
                       rewards=tuple(PerItemReward.from_dict(r) for r in effect["per_item"]))
        raise ValueError(f"Unknown card effect {effect}")

    @property
    def is_producer(self) -> bool:
        return self.type in (PowerType.PURCHASABLE_PRODUCER, PowerType.PRODUCER)

    def __str__(self) -> str:
        if self.is_producer:
            return str(self.production)
        if self.type == PowerType.VICTORY_POINTS:
            return f"{self.amount} VP"
        if self.type == PowerType.COINS:
            return f"{self.amount} coins"
        if self.type == PowerType.SHIELDS:
            return f"{self.amount} shields"
        if self.type == PowerType.SCIENCE:
            return " / ".join(s.value for s in self.science)
        if self.type == PowerType.PER_ITEM_REWARDS:
            return "; ".join(str(r) for r in self.rewards)
        return {
            PowerType.BUY_BROWN_ANTICLOCKWISE: "raw materials from the right for 1 coin",
            PowerType.BUY_BROWN_CLOCKWISE: "raw materials from the left for 1 coin",
            PowerType.BUY_GREY: "manufactured goods from either neighbour for 1 coin",
        }[self.type]
