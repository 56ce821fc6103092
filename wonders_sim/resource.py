"""
Works out whether, and how, a player can pay for a card.

Per rules: a player can use their own production and/or buy resources from
their two neighbours' brown and grey cards, at BORROW_PRICE coins per unit.
The player's own resources are never used up.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .action import Action, ActionOptions, Borrow, Borrowing
from .constants import BORROW_PRICE, Resource
from .cost import Resources
from .models import Card
from .power import PowerType
from .scoring import count_items

LEFT = "left"
RIGHT = "right"

@dataclass
class UsableResource:
    """
    One way of filling a gap in a cost.

    Own choice producers are always used (it costs nothing), so they are
    mandatory. Neighbours' units are optional: not borrowing is a branch too.
    """
    options: List[Resource]
    optional: bool
    source: Optional[str] = None
    card: Optional[Card] = None
    index: int = 0
    # Where the card sits on its owner's board; borrows are listed in this order.
    position: int = 0

    def radix(self) -> int:
        return len(self.options) + (1 if self.optional else 0)

def has_chain_prerequisite(player, card: Card) -> bool:
    """Checks if a card can be built for free via a chain."""
    return any(card.name in built.chains_to for built in player.built_cards)

def has_built(player, card: Card) -> bool:
    return any(built.name == card.name for built in player.built_cards)

def residual_cost(player, card: Card) -> Tuple[Resources, List[Card]]:
    """
    Subtract everything the player unconditionally has from the card's cost.

    Returns the residual cost and the player's own choice-producing cards,
    which still need to be decided.
    """
    cost = card.cost.copy()
    cost.take(Resource.COINS, player.coins)
    cost -= player.wonder.starting_resource()

    choices = []
    for built in player.built_cards:
        if not built.power.is_producer:
            continue
        if built.power.production.is_choice:
            choices.append(built)
        else:
            cost -= built.power.production.fixed()
    return cost, choices

def get_usable_resources(cost: Resources, own_choices: List[Card], left, right,
                         rng: Optional[random.Random] = None) -> List[UsableResource]:
    """
    Everything that could still help pay `cost`: own choice producers first,
    then every borrowable unit the neighbours have that is of a needed kind.

    If `rng` is given the neighbours' cards are visited in random order.
    """
    usable = []
    for built in own_choices:
        options = [kind for kind in built.power.production.options if cost.has_deficit(kind)]
        if options:
            usable.append(UsableResource(options, optional=False))

    groups = []
    for source, neighbour in ((LEFT, left), (RIGHT, right)):
        for position, built in enumerate(neighbour.built_cards):
            if built.power.type != PowerType.PURCHASABLE_PRODUCER:
                continue
            production = built.power.production
            if production.is_choice:
                options = [kind for kind in production.options if cost.has_deficit(kind)]
                if options:
                    groups.append([UsableResource(options, True, source, built, 0, position)])
                continue
            units = []
            for index, unit in enumerate(production.units()):
                kind = unit.kinds()[0]
                if cost.has_deficit(kind):
                    units.append(UsableResource([kind], True, source, built, index, position))
            if units:
                groups.append(units)

    if rng is not None:
        rng.shuffle(groups)
    for group in groups:
        usable.extend(group)
    return usable

def _combinations(usable: List[UsableResource]) -> int:
    combinations = 1
    for resource in usable:
        combinations *= resource.radix()
    return combinations

def _in_board_order(borrows) -> Tuple[Borrow, ...]:
    """The same plan must compare equal however the search reached it."""
    return tuple(borrow for _, _, borrow in sorted(borrows, key=lambda b: (b[0], b[1])))

def _try_combination(combination: int, cost: Resources,
                     usable: List[UsableResource]) -> Optional[Borrowing]:
    """
    Decode one combination index (mixed radix, one digit per usable resource)
    and return the borrowing it describes, or None if it doesn't pay the cost.
    """
    remaining = cost.copy()
    borrows = {LEFT: [], RIGHT: []}
    taken_first_unit = set()

    for resource in usable:
        choice = combination % resource.radix()
        combination //= resource.radix()

        if not resource.optional:
            remaining.take(resource.options[choice])
            continue
        if choice == len(resource.options):
            continue

        kind = resource.options[choice]
        # Never borrow something that is no longer needed.
        if not remaining.has_deficit(kind):
            return None
        # The second unit of a double producer only goes with the first.
        if resource.index == 1 and (resource.source, resource.card) not in taken_first_unit:
            return None
        remaining.take(kind)
        remaining.coins += BORROW_PRICE
        if remaining.coins > 0:
            return None

        borrows[resource.source].append((resource.position, resource.index, Borrow(resource.card, resource.index)))
        if resource.index == 0:
            taken_first_unit.add((resource.source, resource.card))

    if not remaining.satisfied():
        return None
    return Borrowing(left=_in_board_order(borrows[LEFT]), right=_in_board_order(borrows[RIGHT]))

def options_for_card(player, card: Card, left, right, single_option: bool = False,
                     rng: Optional[random.Random] = None) -> ActionOptions:
    """
    Every distinct way `player` can build `card`, given the public boards of
    their left and right neighbours.

    If the card is affordable with the player's own resources there is a
    single option with no borrowing. With `single_option`, the search stops at
    the first option found, visiting neighbours' cards in an order shuffled by
    `rng`.
    """
    if has_built(player, card):
        return ActionOptions()
    if has_chain_prerequisite(player, card):
        return ActionOptions([Action.build(card)])

    cost, own_choices = residual_cost(player, card)
    if cost.satisfied():
        return ActionOptions([Action.build(card)])
    if cost.coins > 0:
        return ActionOptions()

    shuffle_rng = (rng or random.Random()) if single_option else None
    usable = get_usable_resources(cost, own_choices, left, right, shuffle_rng)

    # However the player's own choice cards get used, it's one action.
    own = [resource for resource in usable if not resource.optional]
    if any(_try_combination(c, cost, own) is not None for c in range(_combinations(own))):
        return ActionOptions([Action.build(card)])

    actions = []
    seen = set()
    for combination in range(_combinations(usable)):
        borrowing = _try_combination(combination, cost, usable)
        if borrowing is None or borrowing in seen:
            continue
        seen.add(borrowing)
        actions.append(Action.build(card, borrowing))
        if single_option:
            break
    return ActionOptions(actions)

def immediate_coins(card: Card, player, left, right) -> int:
    """Coins a structure pays out the moment it is built."""
    power = card.power
    if power.type == PowerType.COINS:
        return power.amount
    if power.type != PowerType.PER_ITEM_REWARDS:
        return 0

    return sum(reward.coins_per_thing * count_items(reward, player, left, right)
               for reward in power.rewards if reward.coins_per_thing)
