"""Lets a human play by asking them what to do each turn."""

from typing import List
from ..action import Action
from . import PlayingAlgorithm

def _get_colored_text(text, color_name):
    """Apply ANSI color to text based on card color name."""
    colors = {
        "brown": "\033[38;5;94m",   # Brown (Raw Materials)
        "grey": "\033[90m",         # Grey (Manufactured Goods)
        "blue": "\033[94m",         # Blue (Civilian)
        "green": "\033[92m",        # Green (Science)
        "yellow": "\033[93m",       # Yellow (Commercial)
        "red": "\033[91m",          # Red (Military)
        "purple": "\033[95m",       # Purple (Guilds)
    }
    code = colors.get(str(color_name).lower(), "\033[0m")
    return f"{code}{text}\033[0m"

def _card_text(card) -> str:
    return _get_colored_text(card.name, card.color.value)

class Human(PlayingAlgorithm):

    def __init__(self, input_fn=input):
        self.input_fn = input_fn

    def print_state(self, player, visible_game):
        """Print every board, with ours in the middle, then our hand."""
        all_players = visible_game.public_players
        me = visible_game.player_index
        offset = len(all_players) // 2 + 1 + me
        for i in range(len(all_players)):
            index = (i + offset) % len(all_players)
            other = all_players[index]
            role = " (you)" if index == me else ""
            print(f"\n--- Player {index + 1}{role} ---")
            print(f"Wonder: {other.wonder.name} (side {other.wonder_side}). "
                  f"Starting resource: {other.wonder.start_resource.value}")
            print(f"Coins: {other.coins}")
            for card in other.built_cards:
                print(f"  {_card_text(card):<40} {card.power}")

        print(f"\n--- Your hand (age {visible_game.age().value}) ---")
        print("  (* buildable with your own resources, # buildable by borrowing)")
        for i, card in enumerate(player.hand):
            options = player.options_for_card(card, visible_game)
            if not options.possible():
                mark = " "
            elif options.own_cards_only():
                mark = "*"
            else:
                mark = "#"
            print(f"{mark} {i + 1}: {_card_text(card):<40} cost: {str(card.cost):<30} {card.power}")

    def ask(self, prompt: str, choices: int) -> int:
        """Ask for a number between 1 and `choices`, returning it zero-based."""
        while True:
            answer = self.input_fn(prompt)
            try:
                choice = int(answer)
            except ValueError:
                print("Invalid input. Please enter a number.")
                continue
            if 1 <= choice <= choices:
                return choice - 1
            print("Invalid index. Try again.")

    def get_next_action(self, player, visible_game) -> Action:
        self.print_state(player, visible_game)
        card = player.hand[self.ask("\nWhich card? ", len(player.hand))]

        actions: List[Action] = list(player.options_for_card(card, visible_game).actions)
        actions.append(Action.discard(card))
        if len(actions) == 1:
            print(f"{card.name} can't be built, discarding it.")
            return actions[0]

        print("Available Actions:")
        for i, action in enumerate(actions):
            print(f"  {i + 1}: {action}")
        return actions[self.ask("Enter action index: ", len(actions))]
