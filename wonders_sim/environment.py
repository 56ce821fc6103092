"""
7 Wonders game engine.

Seats players around a table, deals each age's cards, collects one action
per player per turn and passes hands around until the 18 turns are played.
Supports 3-7 players.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from .action import Action
from .constants import (Age, GameState, HAND_SIZE, MAX_ACTION_ATTEMPTS, MAX_PLAYERS, MIN_PLAYERS,
                        NUM_TURNS, TURNS_PER_AGE)
from .errors import IllegalActionError
from .player import Player, PublicPlayer
from . import setup
from . import scoring

logger = logging.getLogger(__name__)

def age_for_turn(turn: int) -> Age:
    """Turns 0-5 are the first age, 6-11 the second and 12-17 the third."""
    if not 0 <= turn < NUM_TURNS:
        raise ValueError(f"Unknown turn {turn}")
    return Age(turn // TURNS_PER_AGE + 1)

@dataclass(frozen=True)
class VisibleGame:
    """
    The part of the game a player may look at when deciding: every seat's
    public view, taken before anyone acted this turn.
    """
    public_players: Tuple[PublicPlayer, ...]
    player_index: int
    turn: int

    def me(self) -> PublicPlayer:
        return self.public_players[self.player_index]

    def left_neighbour(self) -> PublicPlayer:
        return self.public_players[(self.player_index + 1) % len(self.public_players)]

    def right_neighbour(self) -> PublicPlayer:
        return self.public_players[(self.player_index - 1) % len(self.public_players)]

    def age(self) -> Age:
        return age_for_turn(self.turn)

    def player_count(self) -> int:
        return len(self.public_players)

class Game:
    """
    A game of 7 Wonders.

    Moving up through `players` is moving clockwise around the table: the
    player at index + 1 is a player's left neighbour and the player at
    index - 1 their right neighbour, wrapping around at both ends.
    """

    def __init__(self, algorithms: Sequence, rng: Optional[random.Random] = None,
                 random_seed: Optional[int] = None, players: Optional[List[Player]] = None,
                 turn: int = 0):
        """
        Initialize a game.

        Args:
            algorithms: One decision strategy per seat (3-7)
            rng: Random source for dealing and wonder assignment
            random_seed: Seed for a fresh random source, if `rng` is not given
            players: Existing players, hands already dealt, to continue a game with
            turn: The turn `players` are at
        """
        if not MIN_PLAYERS <= len(algorithms) <= MAX_PLAYERS:
            raise ValueError(f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, "
                             f"got {len(algorithms)}")

        self.rng = rng if rng is not None else random.Random(random_seed)
        self.algorithms = list(algorithms)

        if players is None:
            wonders = setup.assign_wonders(len(self.algorithms), self.rng)
            self.players = [Player(wonder) for wonder in wonders]
            self._hands_dealt = False
        else:
            if len(players) != len(self.algorithms):
                raise ValueError(f"Got {len(players)} players for {len(self.algorithms)} algorithms")
            self.players = list(players)
            self._hands_dealt = True

        age_for_turn(turn)
        self.turn = turn
        self.discard_pile = []
        self.state = GameState.DEALING if turn % TURNS_PER_AGE == 0 else GameState.AWAITING_DECISIONS

    @classmethod
    def from_players(cls, players: List[Player], algorithms: Sequence, turn: int,
                     rng: Optional[random.Random] = None) -> "Game":
        """Continue from the given players, whose hands for this turn are already dealt."""
        return cls(algorithms, rng=rng, players=players, turn=turn)

    def player_count(self) -> int:
        return len(self.players)

    def age(self) -> Age:
        """Returns the current age being played."""
        return age_for_turn(self.turn)

    def is_done(self) -> bool:
        return self.state == GameState.FINISHED

    def neighbourhood(self, index: int) -> Tuple[Player, Player, Player]:
        """
        The (right neighbour, player, left neighbour) around seat `index`, all
        three live and distinct so one action can debit the player and credit
        both neighbours.
        """
        num_players = len(self.players)
        if not 0 <= index < num_players:
            raise IndexError(f"No seat {index} at a table of {num_players}")

        if index == 0:
            right, left = self.players[num_players - 1], self.players[1]
        elif index == num_players - 1:
            right, left = self.players[index - 1], self.players[0]
        else:
            right, left = self.players[index - 1], self.players[index + 1]
        me = self.players[index]

        if len({id(right), id(me), id(left)}) != 3:
            raise ValueError(f"Seat {index} does not have two distinct neighbours")
        return right, me, left

    def do_turn(self):
        """
        Play one turn: deal if an age is starting, get an action from every
        player against the same snapshot, apply them in seat order, then pass
        hands on.
        """
        if self.is_done():
            raise ValueError("Cannot play a turn, the game is over")

        age = self.age()
        if self.turn % TURNS_PER_AGE == 0 and not self._hands_dealt:
            self._deal(age)
        self._hands_dealt = False

        snapshot = tuple(player.public() for player in self.players)
        for index, algorithm in enumerate(self.algorithms):
            right, me, left = self.neighbourhood(index)
            visible_game = VisibleGame(snapshot, index, self.turn)
            self._resolve_action(index, algorithm, me, left, right, visible_game)

        self.state = GameState.ROTATING
        self._rotate_hands(age)

        self.turn += 1
        if self.turn >= NUM_TURNS:
            self._collect_leftovers()
            self.state = GameState.FINISHED
            logger.debug(f"Game over after {self.turn} turns")
        elif self.turn % TURNS_PER_AGE == 0:
            self.state = GameState.DEALING
        else:
            self.state = GameState.AWAITING_DECISIONS

    def play(self) -> List[int]:
        """Play the remaining turns and return each seat's strength, in seating order."""
        while not self.is_done():
            self.do_turn()
        scores = scoring.calculate_scores(self)
        logger.debug(f"Final scores: {scores}")
        return scores

    def _resolve_action(self, index: int, algorithm, me: Player, left: Player, right: Player,
                        visible_game: VisibleGame):
        for attempt in range(MAX_ACTION_ATTEMPTS):
            self.state = GameState.AWAITING_DECISIONS
            action: Action = algorithm.get_next_action(me, visible_game)

            self.state = GameState.RESOLVING
            if me.do_action(action, visible_game, left, right, self.discard_pile):
                logger.debug(f"Turn {self.turn}, player {index}: {action}")
                return
            logger.warning(f"Turn {self.turn}, player {index}: attempt {attempt + 1} refused ({action})")

        raise IllegalActionError(
            f"Player {index} proposed {MAX_ACTION_ATTEMPTS} illegal actions on turn {self.turn}")

    def _deal(self, age: Age):
        """Deal a fresh hand to everyone; what was left of the old hands is discarded."""
        self.state = GameState.DEALING
        deck = setup.new_deck(age, len(self.players), self.rng)
        for player in self.players:
            old_hand = player.swap_hand([deck.pop() for _ in range(HAND_SIZE)])
            self.discard_pile.extend(old_hand)
        logger.debug(f"Dealt {age.name.lower()} age hands to {len(self.players)} players")

    def _collect_leftovers(self):
        for player in self.players:
            self.discard_pile.extend(player.swap_hand([]))

    def _rotate_hands(self, age: Age):
        """Rotate hands to neighbours (direction depends on age)."""
        # Age 1 and 3: pass left (clockwise) - index increases
        # Age 2: pass right (anticlockwise) - index decreases
        num_players = len(self.players)
        hands = [player.hand for player in self.players]

        if age in (Age.FIRST, Age.THIRD):
            for i, player in enumerate(self.players):
                player.hand = hands[(i - 1) % num_players]
        else:
            for i, player in enumerate(self.players):
                player.hand = hands[(i + 1) % num_players]

    def get_observation(self) -> Dict:
        """
        Get the current game state as plain data.

        Returns:
            Dictionary describing the table
        """
        observation = {
            "turn": self.turn,
            "state": self.state.value,
            "num_players": len(self.players),
            "discard_pile": [c.name for c in self.discard_pile],
            "players": []
        }
        if not self.is_done():
            observation["age"] = self.age().value

        for index, player in enumerate(self.players):
            observation["players"].append({
                "player_id": index,
                "coins": player.coins,
                "wonder_name": player.wonder.name,
                "wonder_side": player.wonder_side,
                "built_card_names": [c.name for c in player.built_cards],
                "current_hand": [c.name for c in player.hand],
            })
        return observation

    def render(self):
        """Render the current game state (for debugging)."""
        if self.is_done():
            print("\n=== Game over ===")
        else:
            print(f"\n=== Age {self.age().value}, Turn {self.turn % TURNS_PER_AGE + 1} ===")
        for index, player in enumerate(self.players):
            print(f"\nPlayer {index + 1} ({player.wonder.name}):")
            print(f"  Coins: {player.coins}")
            print(f"  Cards built: {', '.join(c.name for c in player.built_cards) or '-'}")
