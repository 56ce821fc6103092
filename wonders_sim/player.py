import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from .action import Action, ActionOptions, ActionType
from .constants import BORROW_PRICE, DISCARD_COINS, STARTING_COINS, WONDER_SIDE
from .models import Card, Wonder, WonderStage
from . import resource as resource_manager
from . import scoring

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PublicPlayer:
    """What everyone at the table can see of a player at one moment."""
    wonder: Wonder
    wonder_side: str
    built_cards: Tuple[Card, ...]
    built_wonder_stages: Tuple[WonderStage, ...]
    coins: int

@dataclass
class Player:
    wonder: Wonder
    wonder_side: str = WONDER_SIDE
    coins: int = STARTING_COINS

    built_cards: List[Card] = field(default_factory=list)
    # Wonder stages can't be built yet; kept so scoring can count them.
    built_wonder_stages: List[WonderStage] = field(default_factory=list)
    hand: List[Card] = field(default_factory=list)

    @classmethod
    def new_from_public(cls, public: PublicPlayer, hand: List[Card]) -> "Player":
        """A fully independent player rebuilt from a public view and a hand."""
        return cls(
            wonder=public.wonder,
            wonder_side=public.wonder_side,
            coins=public.coins,
            built_cards=list(public.built_cards),
            built_wonder_stages=list(public.built_wonder_stages),
            hand=list(hand),
        )

    def public(self) -> PublicPlayer:
        return PublicPlayer(
            wonder=self.wonder,
            wonder_side=self.wonder_side,
            built_cards=tuple(self.built_cards),
            built_wonder_stages=tuple(self.built_wonder_stages),
            coins=self.coins,
        )

    def swap_hand(self, new_hand: List[Card]) -> List[Card]:
        """Replace the hand wholesale, returning the old one."""
        old_hand, self.hand = self.hand, new_hand
        return old_hand

    def options_for_card(self, card: Card, visible_game, single_option: bool = False,
                         rng: Optional[random.Random] = None) -> ActionOptions:
        """Every way this player can build `card` this turn."""
        return resource_manager.options_for_card(
            self, card, visible_game.left_neighbour(), visible_game.right_neighbour(),
            single_option=single_option, rng=rng,
        )

    def can_play(self, action: Action, visible_game) -> bool:
        """
        Returns True if the action is legal: the card is in hand and, for a
        build, the borrowing is one the resolver offers for the current
        public boards.
        """
        if action.card not in self.hand:
            return False
        if action.type == ActionType.DISCARD:
            return True
        if action.type == ActionType.WONDER:
            return False
        if not action.borrowing.valid(visible_game):
            return False
        return action in self.options_for_card(action.card, visible_game).actions

    def do_action(self, action: Action, visible_game, left: "Player", right: "Player",
                  discard_pile: List[Card]) -> bool:
        """
        Apply an action, paying borrowed resources to the actual neighbours.

        Returns False, changing nothing, if the action is not legal.
        """
        if not self.can_play(action, visible_game):
            logger.debug(f"Refused illegal action: {action}")
            return False

        card = action.card
        self.hand.remove(card)

        if action.type == ActionType.DISCARD:
            self.coins += DISCARD_COINS
            discard_pile.append(card)
            return True

        if not resource_manager.has_chain_prerequisite(self, card):
            self.coins -= card.cost.coins
        borrowing = action.borrowing
        self.coins -= borrowing.cost()
        left.coins += len(borrowing.left) * BORROW_PRICE
        right.coins += len(borrowing.right) * BORROW_PRICE

        self.built_cards.append(card)
        self.coins += resource_manager.immediate_coins(card, self, left, right)
        return True

    def strength(self, left, right) -> int:
        return scoring.calculate_strength(self, left, right)
