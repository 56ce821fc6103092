from .environment import Game, VisibleGame
from .constants import Age, CardColor, GameState, Resource, ScienceSymbol
from .cost import Production, ProductionType, Resources
from .power import Power, PowerType
from .models import Card, Wonder, WonderStage
from .action import Action, ActionOptions, ActionType, Borrow, Borrowing
from .player import Player, PublicPlayer
from .errors import IllegalActionError

__all__ = [
    "Game",
    "VisibleGame",
    "Age",
    "CardColor",
    "GameState",
    "Resource",
    "ScienceSymbol",
    "Production",
    "ProductionType",
    "Resources",
    "Power",
    "PowerType",
    "Card",
    "Wonder",
    "WonderStage",
    "Action",
    "ActionOptions",
    "ActionType",
    "Borrow",
    "Borrowing",
    "Player",
    "PublicPlayer",
    "IllegalActionError"
]
