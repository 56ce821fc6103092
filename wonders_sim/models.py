from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from .constants import Age, CardColor, Resource
from .cost import Resources
from .power import Power

@dataclass(frozen=True)
class Card:
    name: str
    age: Age
    color: CardColor
    players: Tuple[int, ...]  # One copy enters the deck per threshold <= seat count
    cost: Resources = field(default_factory=Resources, compare=False, hash=False)
    chains_to: Tuple[str, ...] = ()
    power: Power = field(default=None, compare=False, hash=False)

    def copies_for(self, num_players: int) -> int:
        return sum(1 for needed in self.players if needed <= num_players)

    def __str__(self) -> str:
        return self.name

@dataclass
class WonderStage:
    stage: int
    cost: Resources
    effect: Dict
    built: bool = False

@dataclass(frozen=True)
class Wonder:
    name: str
    start_resource: Resource
    sides: Dict[str, List[WonderStage]] = field(compare=False, hash=False)

    def starting_resource(self) -> Resources:
        return Resources.of(self.start_resource)

    def stage_cost(self, side: str, position: int) -> Resources:
        return self.sides[side][position].cost

    def __str__(self) -> str:
        return self.name
