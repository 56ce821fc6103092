from enum import Enum

class CardColor(Enum):
    BROWN = "brown"
    GREY = "grey"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"

class ScienceSymbol(Enum):
    COMPASS = "compass"
    COG = "cog"
    TABLET = "tablet"

class Resource(Enum):
    COINS = "coins"
    WOOD = "wood"
    STONE = "stone"
    ORE = "ore"
    CLAY = "clay"
    GLASS = "glass"
    LOOM = "loom"
    PAPYRUS = "papyrus"

class Age(Enum):
    FIRST = 1
    SECOND = 2
    THIRD = 3

class GameState(Enum):
    DEALING = "dealing"
    AWAITING_DECISIONS = "awaiting_decisions"
    RESOLVING = "resolving"
    ROTATING = "rotating"
    FINISHED = "finished"

RAW_MATERIALS = (Resource.WOOD, Resource.STONE, Resource.ORE, Resource.CLAY)
MANUFACTURED_GOODS = (Resource.GLASS, Resource.LOOM, Resource.PAPYRUS)

MIN_PLAYERS = 3
MAX_PLAYERS = 7

STARTING_COINS = 3
DISCARD_COINS = 3
BORROW_PRICE = 2

HAND_SIZE = 7
TURNS_PER_AGE = 6
NUM_AGES = 3
NUM_TURNS = TURNS_PER_AGE * NUM_AGES

# How many times a strategy is asked again after proposing an illegal action.
MAX_ACTION_ATTEMPTS = 3

WONDER_SIDE = "A"
