"""Tests for the turn engine: seating, dealing, passing hands and whole games."""
import random
from collections import Counter

import pytest

from wonders_sim.action import Action, Borrow, Borrowing
from wonders_sim.algorithms import PlayingAlgorithm, Random
from wonders_sim.constants import Age, GameState, HAND_SIZE
from wonders_sim.environment import Game, VisibleGame, age_for_turn
from wonders_sim.errors import IllegalActionError
from wonders_sim.player import Player
from wonders_sim.setup import find_card, find_wonder


class DiscardsLast(PlayingAlgorithm):
    """Always discards the last card of its hand, recording the hand sizes it saw."""

    def __init__(self):
        self.hand_sizes = []

    def get_next_action(self, player, visible_game) -> Action:
        self.hand_sizes.append(len(player.hand))
        return Action.discard(player.hand[-1])


class Scripted(PlayingAlgorithm):
    """Plays the given actions in order, then discards."""

    def __init__(self, *actions):
        self.actions = list(actions)

    def get_next_action(self, player, visible_game) -> Action:
        if self.actions:
            return self.actions.pop(0)
        return Action.discard(player.hand[-1])


class AlwaysIllegal(PlayingAlgorithm):

    def __init__(self):
        self.calls = 0

    def get_next_action(self, player, visible_game) -> Action:
        self.calls += 1
        return Action.build(find_card("Palace"))


def discarding_game(num_players=3, seed=42):
    return Game([DiscardsLast() for _ in range(num_players)], random_seed=seed)


def hands(game):
    return [list(player.hand) for player in game.players]


class TestSetup:

    @pytest.mark.parametrize("num_players", [0, 2, 8])
    def test_wrong_number_of_players(self, num_players):
        with pytest.raises(ValueError):
            Game([DiscardsLast() for _ in range(num_players)])

    @pytest.mark.parametrize("num_players", range(3, 8))
    def test_new_game(self, num_players):
        game = discarding_game(num_players)
        assert game.player_count() == num_players
        assert game.turn == 0
        assert game.age() == Age.FIRST
        assert game.state == GameState.DEALING
        assert len({player.wonder.name for player in game.players}) == num_players
        assert all(player.coins == 3 for player in game.players)

    def test_age_for_turn(self):
        assert age_for_turn(0) == Age.FIRST
        assert age_for_turn(5) == Age.FIRST
        assert age_for_turn(6) == Age.SECOND
        assert age_for_turn(11) == Age.SECOND
        assert age_for_turn(12) == Age.THIRD
        assert age_for_turn(17) == Age.THIRD
        with pytest.raises(ValueError):
            age_for_turn(18)
        with pytest.raises(ValueError):
            age_for_turn(-1)


class TestNeighbourhood:

    @pytest.mark.parametrize("num_players", range(3, 8))
    def test_neighbours_are_distinct(self, num_players):
        game = discarding_game(num_players)
        for index in range(num_players):
            right, me, left = game.neighbourhood(index)
            assert me is game.players[index]
            assert left is game.players[(index + 1) % num_players]
            assert right is game.players[(index - 1) % num_players]
            assert len({id(right), id(me), id(left)}) == 3

    def test_first_and_last_seats_wrap(self):
        game = discarding_game(4)
        right, _, left = game.neighbourhood(0)
        assert right is game.players[3]
        assert left is game.players[1]
        right, _, left = game.neighbourhood(3)
        assert right is game.players[2]
        assert left is game.players[0]

    def test_unknown_seat(self):
        game = discarding_game(3)
        with pytest.raises(IndexError):
            game.neighbourhood(3)
        with pytest.raises(IndexError):
            game.neighbourhood(-1)

    def test_visible_game_neighbours(self):
        game = discarding_game(5)
        snapshot = tuple(player.public() for player in game.players)
        visible_game = VisibleGame(snapshot, 0, 0)
        assert visible_game.me() is snapshot[0]
        assert visible_game.left_neighbour() is snapshot[1]
        assert visible_game.right_neighbour() is snapshot[4]
        assert visible_game.player_count() == 5


class TestTurns:

    def test_first_turn_deals_and_plays(self):
        game = discarding_game()
        game.do_turn()
        assert game.turn == 1
        assert all(len(player.hand) == HAND_SIZE - 1 for player in game.players)
        assert len(game.discard_pile) == 3
        assert all(player.coins == 6 for player in game.players)
        assert game.state == GameState.AWAITING_DECISIONS

    def test_hands_pass_clockwise_in_first_age(self):
        game = discarding_game()
        game.do_turn()
        before = hands(game)
        game.do_turn()
        after = hands(game)
        for index in range(3):
            assert after[(index + 1) % 3] == before[index][:-1]

    def test_hands_pass_anticlockwise_in_second_age(self):
        game = discarding_game()
        for _ in range(7):
            game.do_turn()
        assert game.age() == Age.SECOND
        before = hands(game)
        game.do_turn()
        after = hands(game)
        for index in range(3):
            assert after[(index - 1) % 3] == before[index][:-1]

    def test_hands_pass_clockwise_in_third_age(self):
        game = discarding_game()
        for _ in range(13):
            game.do_turn()
        assert game.age() == Age.THIRD
        before = hands(game)
        game.do_turn()
        after = hands(game)
        for index in range(3):
            assert after[(index + 1) % 3] == before[index][:-1]

    def test_rotation_keeps_every_card(self):
        game = discarding_game(4)
        game.do_turn()
        before = Counter(card for hand in hands(game) for card in hand)
        played = Counter(hand[-1] for hand in hands(game))
        game.do_turn()
        after = Counter(card for hand in hands(game) for card in hand)
        assert after == before - played

    def test_new_age_discards_leftovers_and_deals(self):
        algorithms = [DiscardsLast() for _ in range(3)]
        game = Game(algorithms, random_seed=7)
        for _ in range(6):
            game.do_turn()
        assert game.turn == 6
        assert game.state == GameState.DEALING
        leftovers = [player.hand[0] for player in game.players]
        assert all(len(player.hand) == 1 for player in game.players)
        assert len(game.discard_pile) == 18

        game.do_turn()
        assert all(algorithm.hand_sizes[-1] == HAND_SIZE for algorithm in algorithms)
        assert game.discard_pile[18:21] == leftovers
        assert len(game.discard_pile) == 24
        assert all(card.age == Age.SECOND for card in game.discard_pile[21:])

    def test_leftovers_are_the_only_discards_at_a_new_age(self):
        """Nobody discarded during the age: the pile holds just the three leftovers."""
        seen = []

        class BuildsThenWatches(PlayingAlgorithm):
            def get_next_action(self, player, visible_game):
                if visible_game.turn == 5:
                    return Action.build(player.hand[0])
                seen.append((len(game.discard_pile), len(player.hand)))
                return Action.discard(player.hand[0])

        wonder = find_wonder("Colossus of Rhodes")
        players = [
            Player(wonder, hand=[find_card("Lumber Yard"), find_card("Stone Pit")]),
            Player(wonder, hand=[find_card("Clay Pool"), find_card("Theater")]),
            Player(wonder, hand=[find_card("Loom"), find_card("Glassworks")]),
        ]
        game = Game.from_players(players, [BuildsThenWatches() for _ in range(3)], turn=5,
                                 rng=random.Random(0))
        game.do_turn()
        assert all(len(player.hand) == 1 for player in game.players)

        game.do_turn()
        assert seen[0] == (3, HAND_SIZE)
        assert {card.name for card in game.discard_pile[:3]} == {"Stone Pit", "Theater", "Glassworks"}

    def test_game_ends_after_eighteen_turns(self):
        game = discarding_game()
        for _ in range(18):
            game.do_turn()
        assert game.is_done()
        assert game.state == GameState.FINISHED
        assert all(player.hand == [] for player in game.players)
        assert len(game.discard_pile) == 3 * 3 * HAND_SIZE
        with pytest.raises(ValueError):
            game.do_turn()

    def test_actions_see_the_start_of_turn(self):
        """Coins earned earlier in the turn don't show in later players' views."""
        seen_coins = []

        class RecordsCoins(DiscardsLast):
            def get_next_action(self, player, visible_game):
                seen_coins.append([p.coins for p in visible_game.public_players])
                return super().get_next_action(player, visible_game)

        game = Game([RecordsCoins() for _ in range(3)], random_seed=1)
        game.do_turn()
        assert seen_coins == [[3, 3, 3]] * 3


class TestIllegalActions:

    def test_repeatedly_illegal_action_raises(self):
        algorithm = AlwaysIllegal()
        game = Game([algorithm, DiscardsLast(), DiscardsLast()], random_seed=3)
        with pytest.raises(IllegalActionError):
            game.do_turn()
        assert algorithm.calls == 3
        assert game.players[0].built_cards == []
        assert game.players[0].coins == 3
        assert len(game.players[0].hand) == HAND_SIZE

    def test_illegal_action_is_asked_again(self):
        game = discarding_game()
        game.do_turn()
        card = game.players[0].hand[0]
        game.algorithms[0] = Scripted(Action.build(find_card("Palace")), Action.discard(card))
        game.do_turn()
        assert card in game.discard_pile


class TestBorrowingAtTheTable:

    def test_coins_go_to_the_actual_neighbours(self):
        wonder = find_wonder("Colossus of Rhodes")
        lumber_yard = find_card("Lumber Yard")
        caravansery = find_card("Caravansery")
        players = [
            Player(wonder, coins=4, hand=[caravansery, find_card("Baths")]),
            Player(find_wonder("Lighthouse of Alexandria"), built_cards=[lumber_yard],
                   hand=[find_card("Aqueduct"), find_card("Temple")]),
            Player(find_wonder("Pyramids of Giza"), built_cards=[lumber_yard],
                   hand=[find_card("Statue"), find_card("Courthouse")]),
        ]
        borrowing = Borrowing(left=(Borrow(lumber_yard),), right=(Borrow(lumber_yard),))
        algorithms = [Scripted(Action.build(caravansery, borrowing)), DiscardsLast(), DiscardsLast()]
        game = Game.from_players(players, algorithms, turn=10, rng=random.Random(0))

        game.do_turn()
        assert players[0].coins == 0
        assert players[0].built_cards == [caravansery]
        # 2 coins from the borrowing and 3 for discarding.
        assert players[1].coins == 8
        assert players[2].coins == 8
        assert game.turn == 11


class TestWholeGames:

    @pytest.mark.parametrize("num_players", [3, 5, 7])
    def test_random_game(self, num_players):
        rng = random.Random(num_players)
        game = Game([Random(rng) for _ in range(num_players)], rng=rng)
        scores = game.play()

        assert game.is_done()
        assert len(scores) == num_players
        assert all(score >= 0 for score in scores)
        built = sum(len(player.built_cards) for player in game.players)
        assert built + len(game.discard_pile) == 3 * num_players * HAND_SIZE
        for player in game.players:
            names = [card.name for card in player.built_cards]
            assert len(names) == len(set(names))
            assert player.coins >= 0

    @pytest.mark.parametrize("seed", range(20))
    def test_random_bots_only_propose_legal_actions(self, seed):
        """Every plan the random bots pick must be accepted first time."""
        rng = random.Random(seed)
        proposals = []

        class Checked(Random):
            def get_next_action(self, player, visible_game):
                action = super().get_next_action(player, visible_game)
                proposals.append(player.can_play(action, visible_game))
                return action

        game = Game([Checked(rng) for _ in range(5)], rng=rng)
        game.play()
        assert game.is_done()
        assert len(proposals) == 5 * 18
        assert all(proposals)

    def test_same_seed_same_game(self):
        def play(seed):
            rng = random.Random(seed)
            game = Game([Random(rng) for _ in range(4)], rng=rng)
            return game.play(), [p.coins for p in game.players]
        assert play(11) == play(11)

    def test_observation(self):
        game = discarding_game()
        game.do_turn()
        observation = game.get_observation()
        assert observation["turn"] == 1
        assert observation["age"] == 1
        assert observation["num_players"] == 3
        assert len(observation["players"]) == 3
        assert len(observation["players"][0]["current_hand"]) == HAND_SIZE - 1
        assert len(observation["discard_pile"]) == 3
