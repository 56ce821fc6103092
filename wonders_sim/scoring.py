import itertools
from typing import Dict, List, Tuple
from .constants import CardColor, ScienceSymbol
from .power import CountableItem, PerItemReward, PowerType

def calculate_scores(game) -> List[int]:
    """
    Calculate final strengths for all players.

    Returns:
        One strength per seat, in seating order
    """
    scores = []
    for index, player in enumerate(game.players):
        right, _, left = game.neighbourhood(index)
        scores.append(calculate_strength(player, left, right))
    return scores

def get_winner(game) -> int:
    """
    Determine the winning seat. Ties are not broken: the lowest tied seat is
    returned.
    """
    scores = calculate_scores(game)
    return scores.index(max(scores))

def calculate_strength(player, left, right) -> int:
    """Total score of a board: the sum of its colour scores."""
    return sum(color_scores(player, left, right).values())

def color_scores(player, left, right) -> Dict[CardColor, int]:
    """
    Points per card colour.

    Resource, coin, trade and shield powers score nothing here; their benefit
    was had during play. Science is scored as a whole, under green.
    """
    scores = {color: 0 for color in CardColor}

    for card in player.built_cards:
        power = card.power
        if power.type == PowerType.VICTORY_POINTS:
            scores[card.color] += power.amount
        elif power.type == PowerType.PER_ITEM_REWARDS:
            scores[card.color] += sum(
                reward.points_per_thing * count_items(reward, player, left, right)
                for reward in power.rewards if reward.points_per_thing
            )

    scores[CardColor.GREEN] += calculate_science_score(player.built_cards)
    return scores

def count_items(reward: PerItemReward, player, left, right) -> int:
    """Count the items a per-item reward pays for, over the boards in its scope."""
    boards = []
    if reward.me:
        boards.append(player)
    if reward.neighbours:
        boards.extend([left, right])

    if reward.item == CountableItem.CARD:
        return sum(1 for board in boards for card in board.built_cards if reward.matches_card(card))
    if reward.item == CountableItem.WONDER_STAGE:
        return sum(len(board.built_wonder_stages) for board in boards)
    # Military conflicts are never resolved, so nobody holds defeat tokens.
    return 0

def science_score(counts: Dict[ScienceSymbol, int]) -> int:
    """(sets of 3 = 7pts) + (identical symbols^2)."""
    score = sum(c * c for c in counts.values())
    score += 7 * min(counts.get(symbol, 0) for symbol in ScienceSymbol)
    return score

def calculate_science_score(built_cards) -> int:
    """
    Science VP for a set of built cards.

    Most science cards show one symbol. A power listing several symbols gives
    one of them, whichever scores best alongside the rest.
    """
    counts = {symbol: 0 for symbol in ScienceSymbol}
    choices: List[Tuple[ScienceSymbol, ...]] = []
    for card in built_cards:
        if card.power.type != PowerType.SCIENCE:
            continue
        if len(card.power.science) == 1:
            counts[card.power.science[0]] += 1
        else:
            choices.append(card.power.science)

    best = science_score(counts)
    for picks in itertools.product(*choices):
        trial = dict(counts)
        for symbol in picks:
            trial[symbol] += 1
        best = max(best, science_score(trial))
    return best
