"""
Chooses an action by playing each candidate out to the end of the game many
times with random play, and picking the one that wins most often.

No search tree is built: each candidate is only evaluated one move deep.
"""

import logging
import random
from collections import Counter
from typing import List, Optional
import numpy as np
from ..action import Action
from ..environment import Game
from ..player import Player
from .. import setup
from . import PlayingAlgorithm
from .random_player import Random, random_action

logger = logging.getLogger(__name__)

class FirstActionThenRandom(PlayingAlgorithm):
    """Plays a given action first, if it is still legal, then plays randomly."""

    def __init__(self, action: Action, rng: random.Random):
        self.action = action
        self.rng = rng

    def get_next_action(self, player, visible_game) -> Action:
        if self.action is not None:
            action, self.action = self.action, None
            if player.can_play(action, visible_game):
                return action
        return random_action(player, visible_game, self.rng)

class MonteCarlo(PlayingAlgorithm):

    def __init__(self, playouts: int = 10, rng: Optional[random.Random] = None):
        self.playouts = playouts
        self.rng = rng or random.Random()

    def candidate_actions(self, player, visible_game) -> List[Action]:
        """
        One way of building each buildable card, plus discarding each card.

        Only one borrowing option per card is kept: there can be tens of them,
        and evaluating them all would multiply the search.
        """
        candidates = []
        for card in player.hand:
            options = player.options_for_card(card, visible_game, single_option=True, rng=self.rng)
            if options.possible():
                candidates.append(options.actions[0])
            candidates.append(Action.discard(card))
        return candidates

    def get_next_action(self, player, visible_game) -> Action:
        candidates = self.candidate_actions(player, visible_game)

        # Cards we know about: our hand and everything built. Other players get
        # random hands drawn from the rest.
        known_cards = Counter(player.hand)
        for public_player in visible_game.public_players:
            known_cards.update(public_player.built_cards)

        wins = np.zeros(len(candidates), dtype=np.int64)
        for _ in range(self.playouts):
            for index, action in enumerate(candidates):
                if self._playout(player, visible_game, action, known_cards):
                    wins[index] += 1

        best = int(np.argmax(wins))
        logger.debug(f"Player {visible_game.player_index}: {candidates[best]} won "
                     f"{wins[best]}/{self.playouts} playouts")
        return candidates[best]

    def _playout(self, player, visible_game, action: Action, known_cards: Counter) -> bool:
        """Play one hypothetical game to the end; True if we win it."""
        deck = setup.new_deck_without(visible_game.age(), visible_game.player_count(), known_cards, self.rng)
        hand_size = len(player.hand)

        players = []
        algorithms = []
        for index, public_player in enumerate(visible_game.public_players):
            if index == visible_game.player_index:
                players.append(Player.new_from_public(player.public(), player.hand))
                algorithms.append(FirstActionThenRandom(action, self.rng))
            else:
                hand = [deck.pop() for _ in range(hand_size)]
                players.append(Player.new_from_public(public_player, hand))
                algorithms.append(Random(self.rng))

        game = Game.from_players(players, algorithms, visible_game.turn, rng=self.rng)
        scores = game.play()
        return int(np.argmax(scores)) == visible_game.player_index
