"""A set of algorithms (including humans) that can play 7 Wonders."""

from abc import ABC, abstractmethod
from ..action import Action

class PlayingAlgorithm(ABC):
    """Decides what a player does each turn."""

    @abstractmethod
    def get_next_action(self, player, visible_game) -> Action:
        """
        Returns the action the given player should take.

        Args:
            player: The acting player, hand included
            visible_game: Everyone's public state at the start of the turn
        """

from .random_player import Random
from .monte_carlo import MonteCarlo
from .human import Human

__all__ = ["PlayingAlgorithm", "Random", "MonteCarlo", "Human"]
