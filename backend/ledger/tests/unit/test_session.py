from decimal import Decimal

from ledger.session import aggregate
from ledger.tests.helpers import ALICE, BOB, CAROL, DAVE, ERIN, TENGO, make_game


def _by_name(totals):
    return {t.name: t for t in totals}


class TestAggregate:
    def test_empty_selection_yields_nothing(self):
        games = [make_game("g1", (40000, 30000, 20000, 10000))]

        assert aggregate(games, set()) == []

    def test_single_game_matches_settlement(self):
        game = make_game("g1", (40000, 30000, 20000, 10000))

        totals = aggregate([game], {"g1"})

        assert [t.player_id for t in totals] == [ALICE.id, BOB.id, CAROL.id, DAVE.id]
        assert [t.total_money for t in totals] == [45, 15, -15, -45]
        assert all(t.games_played == 1 for t in totals)

    def test_sums_are_additive_across_games(self):
        g1 = make_game("g1", (40000, 30000, 20000, 10000))
        g2 = make_game("g2", (10000, 20000, 30000, 40000))
        g3 = make_game("g3", (25000, 25000, 25000, 25000), (ALICE, BOB, CAROL, ERIN))

        totals = _by_name(aggregate([g1, g2, g3], {"g1", "g2"}))

        for player in (ALICE, BOB, CAROL, DAVE):
            expected = sum(r.money for g in (g1, g2) for r in g.results if r.player.id == player.id)
            assert totals[player.name].total_money == expected
            assert totals[player.name].games_played == 2
        assert "Erin" not in totals

    def test_counts_games_per_player(self):
        g1 = make_game("g1", (40000, 30000, 20000, 10000))
        g2 = make_game("g2", (25000, 25000, 25000, 25000), (ALICE, BOB, CAROL, ERIN))

        totals = _by_name(aggregate([g1, g2], {"g1", "g2"}))

        assert totals["Alice"].games_played == 2
        assert totals["Dave"].games_played == 1
        assert totals["Erin"].games_played == 1

    def test_player_in_two_seats_counts_one_game(self):
        game = make_game("g1", (40000, 30000, 20000, 10000), (ALICE, BOB, ALICE, DAVE))

        totals = _by_name(aggregate([game], {"g1"}))

        assert totals["Alice"].games_played == 1
        assert totals["Alice"].total_money == 45 + -15
        assert len(totals) == 3

    def test_sorted_by_total_money_descending(self):
        g1 = make_game("g1", (10000, 20000, 30000, 40000))

        totals = aggregate([g1], {"g1"})

        assert [t.name for t in totals] == ["Dave", "Carol", "Bob", "Alice"]

    def test_ties_keep_first_encounter_order(self):
        # Both games are mirror images: everyone nets zero.
        g1 = make_game("g1", (40000, 30000, 20000, 10000))
        g2 = make_game("g2", (10000, 20000, 30000, 40000))
        g2_seats_swapped = make_game("g2", (40000, 30000, 20000, 10000), (DAVE, CAROL, BOB, ALICE))

        totals = aggregate([g1, g2], {"g1", "g2"})
        assert [t.name for t in totals] == ["Alice", "Bob", "Carol", "Dave"]
        assert all(t.total_money == 0 for t in totals)

        swapped_first = aggregate([g2_seats_swapped, g1], {"g1", "g2"})
        assert [t.name for t in swapped_first] == ["Dave", "Carol", "Bob", "Alice"]

    def test_unknown_ids_are_ignored(self):
        games = [make_game("g1", (40000, 30000, 20000, 10000))]

        assert aggregate(games, {"g1", "missing"}) == aggregate(games, {"g1"})
        assert aggregate(games, {"missing"}) == []

    def test_name_taken_from_first_occurrence(self):
        renamed = ALICE.model_copy(update={"name": "Alice R."})
        g1 = make_game("g1", (40000, 30000, 20000, 10000), (renamed, BOB, CAROL, DAVE))
        g2 = make_game("g2", (40000, 30000, 20000, 10000))

        totals = _by_name(aggregate([g1, g2], {"g1", "g2"}))

        assert "Alice R." in totals
        assert totals["Alice R."].games_played == 2

    def test_decimal_money_sums_exactly(self):
        games = [make_game(f"g{i}", (41200, 28700, 19100, 11000), config=TENGO) for i in range(3)]

        totals = _by_name(aggregate(games, {"g0", "g1", "g2"}))

        assert totals["Bob"].total_money == Decimal("20.55")
        assert sum(t.total_money for t in totals.values()) == 0

    def test_repeated_calls_are_identical(self):
        games = [
            make_game("g1", (40000, 30000, 20000, 10000)),
            make_game("g2", (30000, 20000, 25000, 25000)),
        ]

        assert aggregate(games, {"g1", "g2"}) == aggregate(games, {"g1", "g2"})

    def test_accepts_any_collection_of_ids(self):
        games = [make_game("g1", (40000, 30000, 20000, 10000))]

        assert aggregate(games, ["g1"]) == aggregate(games, frozenset({"g1"}))
