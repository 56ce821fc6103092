from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, List, Tuple
from .constants import Resource

@dataclass
class Resources:
    """
    A count per resource kind.

    Used both as an amount still owed (positive means needed) and, once
    available resources have been subtracted, as what is left to find.
    A cost is affordable once every field is at zero or below.
    """
    coins: int = 0

    wood: int = 0
    stone: int = 0
    ore: int = 0
    clay: int = 0

    glass: int = 0
    loom: int = 0
    papyrus: int = 0

    @classmethod
    def free(cls) -> "Resources":
        return cls()

    @classmethod
    def of(cls, kind: Resource, num: int = 1) -> "Resources":
        resources = cls()
        setattr(resources, kind.value, num)
        return resources

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "Resources":
        """Parse the reference-data form, eg. {"coins": 1, "wood": 2}."""
        resources = cls()
        for name, count in data.items():
            try:
                kind = Resource(name)
            except ValueError:
                raise ValueError(f"Unknown resource '{name}' in cost {data}") from None
            setattr(resources, kind.value, getattr(resources, kind.value) + count)
        return resources

    def get(self, kind: Resource) -> int:
        return getattr(self, kind.value)

    def copy(self) -> "Resources":
        return Resources(**{f.name: getattr(self, f.name) for f in fields(self)})

    def take(self, kind: Resource, num: int = 1):
        """Subtract `num` units of a single kind in place."""
        setattr(self, kind.value, getattr(self, kind.value) - num)

    def has_deficit(self, kind: Resource) -> bool:
        return self.get(kind) > 0

    def satisfied(self) -> bool:
        return all(getattr(self, f.name) <= 0 for f in fields(self))

    def max_single(self) -> int:
        """Largest count of any one material (coins excluded)."""
        return max(self.get(kind) for kind in Resource if kind != Resource.COINS)

    def split(self) -> Tuple["Resources", "Resources"]:
        """Halve every material count, giving the two units of a double producer."""
        half = Resources(coins=self.coins)
        for kind in Resource:
            if kind != Resource.COINS:
                setattr(half, kind.value, self.get(kind) // 2)
        return half, half.copy()

    def kinds(self) -> List[Resource]:
        """Material kinds with a positive count."""
        return [kind for kind in Resource if kind != Resource.COINS and self.get(kind) > 0]

    def to_dict(self) -> Dict[str, int]:
        return {kind.value: self.get(kind) for kind in Resource if self.get(kind) != 0}

    def __iadd__(self, other: "Resources") -> "Resources":
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self

    def __isub__(self, other: "Resources") -> "Resources":
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) - getattr(other, f.name))
        return self

    def __add__(self, other: "Resources") -> "Resources":
        result = self.copy()
        result += other
        return result

    def __sub__(self, other: "Resources") -> "Resources":
        result = self.copy()
        result -= other
        return result

    def __str__(self) -> str:
        parts = []
        if self.coins > 0:
            parts.append(f"{self.coins} coin" if self.coins == 1 else f"{self.coins} coins")
        for kind in self.kinds():
            parts.append(f"{self.get(kind)} {kind.value}")
        return ", ".join(parts) if parts else "free"

class ProductionType(Enum):
    SINGLE = "single"
    DOUBLE = "double"
    CHOICE = "choice"

@dataclass(frozen=True)
class Production:
    """What a producing structure yields each time its owner pays a cost."""
    type: ProductionType
    options: Tuple[Resource, ...]

    @classmethod
    def from_effect(cls, effect: Dict) -> "Production":
        if "production_choice" in effect:
            options = tuple(Resource(name) for name in effect["production_choice"]["options"])
            return cls(ProductionType.CHOICE, options)

        produced = Resources.from_dict(effect["production"])
        kinds = produced.kinds()
        if len(kinds) != 1 or produced.max_single() > 2:
            raise ValueError(f"Unsupported production {effect['production']}")
        if produced.max_single() == 2:
            return cls(ProductionType.DOUBLE, (kinds[0],))
        return cls(ProductionType.SINGLE, (kinds[0],))

    @property
    def is_choice(self) -> bool:
        return self.type == ProductionType.CHOICE

    def fixed(self) -> Resources:
        """Everything a single or double producer always yields."""
        if self.is_choice:
            return Resources.free()
        return Resources.of(self.options[0], 2 if self.type == ProductionType.DOUBLE else 1)

    def units(self) -> List[Resources]:
        """The individually borrowable units of a fixed producer, one basket each."""
        if self.is_choice:
            return []
        if self.type == ProductionType.DOUBLE:
            return list(self.fixed().split())
        return [self.fixed()]

    def __str__(self) -> str:
        if self.is_choice:
            return " / ".join(kind.value for kind in self.options)
        return str(self.fixed())
