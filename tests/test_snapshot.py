import json

from cashflow.snapshot import sanitize_state, serialize_snapshot
from cashflow.state import TurnPhase
from helpers import active, give_assets, house_asset, set_phase, stock_card


class TestSanitizeState:
    """Deck contents never leave the server."""

    def test_piles_hidden(self, basic_game):
        sanitized = sanitize_state(basic_game)

        for pile in (
            sanitized.decks.small_deal_deck,
            sanitized.decks.big_deal_deck,
            sanitized.decks.market_deck,
            sanitized.decks.doodad_deck,
        ):
            assert pile
            assert all(card is None for card in pile)

    def test_sizes_kept(self, basic_game):
        sanitized = sanitize_state(basic_game)
        assert len(sanitized.decks.small_deal_deck) == len(basic_game.decks.small_deal_deck)
        assert len(sanitized.decks.doodad_discard) == 0

    def test_input_state_untouched(self, basic_game):
        sanitize_state(basic_game)
        assert basic_game.decks.small_deal_deck[0] is not None

    def test_rest_of_state_kept(self, basic_game):
        sanitized = sanitize_state(basic_game)
        assert sanitized.players == basic_game.players
        assert sanitized.log == basic_game.log


class TestSerializeSnapshot:
    """Tests for the JSON snapshot."""

    def test_json_serializable(self, basic_game):
        state = give_assets(basic_game, "p1", house_asset())
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(stock_card()))
        json.dumps(serialize_snapshot(state))

    def test_top_level_fields(self, basic_game):
        snapshot = serialize_snapshot(basic_game)

        assert snapshot["game_id"] == basic_game.game_id
        assert snapshot["turn_number"] == 1
        assert snapshot["turn_phase"] == "roll_dice"
        assert snapshot["current_player_id"] == "p1"
        assert snapshot["winner"] is None
        assert snapshot["pending_player_deal"] is None
        assert snapshot["log"][0]["event_type"] == "game_start"

    def test_player_totals(self, basic_game):
        totals = serialize_snapshot(basic_game)["players"][0]["totals"]
        assert totals == {
            "passive_income": 0,
            "total_income": 3300,
            "total_expenses": 2340,
            "cash_flow": 960,
        }

    def test_decks_are_counts_only(self, basic_game):
        decks = serialize_snapshot(basic_game)["decks"]
        assert decks["small_deal_deck"] == {"count": 30}
        assert decks["market_discard"] == {"count": 0}

    def test_tagged_unions(self, basic_game):
        state = give_assets(basic_game, "p1", house_asset())
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(stock_card()))
        snapshot = serialize_snapshot(state)

        asset = snapshot["players"][0]["statement"]["assets"][0]
        assert asset["kind"] == "RealEstateAsset"
        assert asset["property_type"] == "house"
        assert snapshot["active_card"]["kind"] == "small_deal"
        assert snapshot["active_card"]["card"]["deal"]["kind"] == "StockDeal"
