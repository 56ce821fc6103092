import json
import os
import random
from collections import Counter
from functools import lru_cache
from typing import Dict, List, Optional, Tuple
from .constants import Age, CardColor, HAND_SIZE, Resource
from .cost import Resources
from .models import Card, Wonder, WonderStage
from .power import Power

DB_DIR = os.path.join(os.path.dirname(__file__), "db")

def load_json(path: str) -> any:
    """Load a JSON file from the package's db directory."""
    with open(os.path.join(DB_DIR, path), 'r', encoding='utf-8') as f:
        return json.load(f)

@lru_cache(maxsize=None)
def load_cards() -> Tuple[Card, ...]:
    """The whole card catalogue, guilds included, in reference-data order."""
    return tuple(create_card_from_data(d) for d in load_json("cards.json"))

@lru_cache(maxsize=None)
def load_wonders() -> Tuple[Wonder, ...]:
    return tuple(create_wonder_from_data(d) for d in load_json("wonder_boards.json"))

def create_card_from_data(card_data: Dict) -> Card:
    """Helper to convert dictionary to Card object."""
    color = CardColor(card_data["color"])
    return Card(
        name=card_data["name"],
        age=Age(card_data["age"]),
        color=color,
        players=tuple(card_data["players"]),
        cost=Resources.from_dict(card_data.get("cost", {})),
        chains_to=tuple(card_data.get("chains_to", [])),
        power=Power.from_effect(color, card_data.get("effect", {})),
    )

def create_wonder_from_data(wonder_data: Dict) -> Wonder:
    sides = {
        side: [
            WonderStage(stage=j + 1, cost=Resources.from_dict(s["cost"]), effect=s["effect"])
            for j, s in enumerate(stages)
        ]
        for side, stages in wonder_data["sides"].items()
    }
    return Wonder(
        name=wonder_data["name"],
        start_resource=Resource(wonder_data["start_resource"]),
        sides=sides,
    )

def find_card(name: str, age: Optional[Age] = None) -> Card:
    """Look up a card by name, optionally restricted to one age."""
    for card in load_cards():
        if card.name == name and (age is None or card.age == age):
            return card
    raise ValueError(f"Unknown card '{name}'")

def find_wonder(name: str) -> Wonder:
    for wonder in load_wonders():
        if wonder.name == name:
            return wonder
    raise ValueError(f"Unknown wonder '{name}'")

def assign_wonders(num_players: int, rng: random.Random) -> List[Wonder]:
    """Shuffle the wonder catalogue and hand out one per seat."""
    wonders = list(load_wonders())
    rng.shuffle(wonders)
    return wonders[:num_players]

def new_deck(age: Age, num_players: int, rng: Optional[random.Random] = None) -> List[Card]:
    """
    Build the shuffled deck for an age.

    Every card contributes one copy per seat-count threshold met. In the third
    age, num_players + 2 guilds are drawn at random from the full guild
    catalogue. The result always holds exactly HAND_SIZE cards per seat.
    """
    rng = rng or random.Random()

    deck = []
    guild_candidates = []
    for card in load_cards():
        if card.age != age:
            continue
        if card.color == CardColor.PURPLE:
            guild_candidates.append(card)
        else:
            deck.extend([card] * card.copies_for(num_players))

    if age == Age.THIRD:
        num_guilds = num_players + 2
        if len(guild_candidates) < num_guilds:
            raise ValueError(f"Not enough Guild cards. Required: {num_guilds}, Found: {len(guild_candidates)}")
        deck.extend(rng.sample(guild_candidates, num_guilds))

    target_size = HAND_SIZE * num_players
    if len(deck) != target_size:
        raise ValueError(f"Wrong deck size for {age.name} age with {num_players} players. "
                         f"Required: {target_size}, Found: {len(deck)}")

    rng.shuffle(deck)
    return deck

def new_deck_without(age: Age, num_players: int, exclude: Counter,
                     rng: Optional[random.Random] = None) -> List[Card]:
    """
    Build a shuffled deck for an age, then remove a multiset of known cards.

    Cards in `exclude` that the deck doesn't hold are ignored, so callers can
    pass everything they have seen, whatever its age.
    """
    remaining = Counter(exclude)
    deck = []
    for card in new_deck(age, num_players, rng):
        if remaining[card] > 0:
            remaining[card] -= 1
        else:
            deck.append(card)
    return deck
