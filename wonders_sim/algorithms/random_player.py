import random
from typing import Optional
from ..action import Action
from . import PlayingAlgorithm

def random_action(player, visible_game, rng: random.Random) -> Action:
    """Build a random buildable card, in some affordable way, or else discard a random card."""
    buildable = []
    for card in player.hand:
        options = player.options_for_card(card, visible_game, single_option=True, rng=rng)
        if options.possible():
            buildable.append(options.actions[0])

    if buildable:
        return rng.choice(buildable)
    return Action.discard(rng.choice(player.hand))

class Random(PlayingAlgorithm):
    """Randomly picks a card to build, discarding a card if none can be built."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_next_action(self, player, visible_game) -> Action:
        return random_action(player, visible_game, self.rng)
