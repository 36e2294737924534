import pytest

from cashflow.cards import AllPlayersExpense, CardKind, PropertyDamage, RealEstateOffer, RealEstateOfferFlat
from cashflow.exceptions import RuleViolation
from cashflow.finance import calculate_passive_income
from cashflow.money import EventType
from cashflow.player import RealEstateType, StockAsset
from cashflow.resolver import (
    resolve_buy_deal,
    resolve_doodad,
    resolve_market,
    resolve_stock_split,
    sell_asset_to_market,
)
from cashflow.state import TurnPhase
from helpers import (
    active,
    business_card,
    doodad_card,
    give_assets,
    house_asset,
    house_card,
    market_card,
    price_change_card,
    set_phase,
    set_player,
    split_card,
    stock_asset,
    stock_card,
)


class TestBuyDeal:
    """Tests for buying the asset on a deal card."""

    def test_buy_stock(self, basic_game):
        state = resolve_buy_deal(basic_game, stock_card(price=5), "p1", shares=10)
        player = state.get_player("p1")

        assert player.cash == 350
        asset = player.statement.assets[0]
        assert isinstance(asset, StockAsset)
        assert asset.asset_id == "asset-1"
        assert asset.shares == 10
        assert state.next_asset_id == 2
        assert state.log[-1].event_type == EventType.PURCHASE

    def test_same_symbol_merges(self, basic_game):
        state = resolve_buy_deal(basic_game, stock_card(price=5), "p1", shares=10)
        state = resolve_buy_deal(state, stock_card(price=10), "p1", shares=5)
        assets = state.get_player("p1").statement.assets

        assert len(assets) == 1
        assert assets[0].shares == 15
        assert assets[0].cost_per_share == 5
        assert state.get_player("p1").cash == 400 - 50 - 50

    def test_cannot_afford_stock(self, basic_game):
        with pytest.raises(RuleViolation):
            resolve_buy_deal(basic_game, stock_card(price=50), "p1", shares=10)

    def test_buy_property(self, basic_game):
        state = set_player(basic_game, "p1", cash=10000)
        state = resolve_buy_deal(state, house_card(down=5000, cash_flow=200), "p1")
        player = state.get_player("p1")

        assert player.cash == 5000
        assert calculate_passive_income(player.statement) == 200

    def test_buy_business(self, basic_game):
        state = set_player(basic_game, "p1", cash=10000)
        state = resolve_buy_deal(state, business_card(down=10000, cash_flow=1500), "p1")
        assert state.get_player("p1").cash == 0
        assert calculate_passive_income(state.get_player("p1").statement) == 1500

    def test_cannot_afford_down_payment(self, basic_game):
        with pytest.raises(RuleViolation):
            resolve_buy_deal(basic_game, house_card(down=5000), "p1")

    def test_skip_payment(self, basic_game):
        state = resolve_buy_deal(basic_game, house_card(down=5000), "p1", skip_payment=True)
        assert state.get_player("p1").cash == 400
        assert len(state.get_player("p1").statement.assets) == 1

    def test_split_cannot_be_bought(self, basic_game):
        with pytest.raises(RuleViolation):
            resolve_buy_deal(basic_game, split_card(), "p1")


class TestMarket:
    """Tests for market card resolution."""

    def test_price_change_waits_for_decision(self, basic_game):
        card = price_change_card()
        state = set_phase(basic_game, TurnPhase.RESOLVE_SPACE, active(card))
        state = resolve_market(state, card)
        assert state.turn_phase == TurnPhase.MAKE_DECISION
        assert state.active_card is not None

    def test_property_damage_only_hits_owners(self, basic_game):
        card = market_card(PropertyDamage((RealEstateType.HOUSE,), 1000))
        state = give_assets(basic_game, "p2", house_asset())
        state = set_player(state, "p2", cash=5000)
        state = set_phase(state, TurnPhase.RESOLVE_SPACE, active(card))

        state = resolve_market(state, card)

        assert state.get_player("p1").cash == 400
        assert state.get_player("p2").cash == 4000
        assert state.turn_phase == TurnPhase.END_OF_TURN
        assert state.active_card is None
        assert state.decks.discard_pile(CardKind.MARKET) == (card,)

    def test_all_players_expense_skips_bankrupt(self, basic_game):
        card = market_card(AllPlayersExpense(300))
        state = set_player(basic_game, "p2", is_bankrupt=True)
        state = set_phase(state, TurnPhase.RESOLVE_SPACE, active(card))

        state = resolve_market(state, card)

        assert state.get_player("p1").cash == 100
        assert state.get_player("p2").cash == 400


class TestSellToMarket:
    def test_sell_stock_at_new_price(self, basic_game):
        card = price_change_card("ON2U", 20)
        state = give_assets(basic_game, "p1", stock_asset(shares=10))
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(card))

        state = sell_asset_to_market(state, "p1", "asset-s")
        player = state.get_player("p1")

        assert player.cash == 600
        assert player.statement.assets == ()

    def test_sell_property_at_multiple(self, basic_game):
        card = market_card(RealEstateOffer((RealEstateType.HOUSE,), 2))
        state = give_assets(basic_game, "p1", house_asset(cost=50000, mortgage=45000))
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(card))

        state = sell_asset_to_market(state, "p1", "asset-h")

        assert state.get_player("p1").cash == 400 + 100000 - 45000

    def test_sell_property_flat(self, basic_game):
        card = market_card(RealEstateOfferFlat((RealEstateType.LAND,), 250000))
        land = house_asset(asset_id="asset-l", cost=5000, mortgage=0, property_type=RealEstateType.LAND)
        state = give_assets(basic_game, "p1", land)
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(card))

        state = sell_asset_to_market(state, "p1", "asset-l")

        assert state.get_player("p1").cash == 250400

    def test_wrong_symbol(self, basic_game):
        card = price_change_card("MYT4U", 20)
        state = give_assets(basic_game, "p1", stock_asset(symbol="ON2U"))
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(card))

        with pytest.raises(RuleViolation):
            sell_asset_to_market(state, "p1", "asset-s")

    def test_wrong_property_type(self, basic_game):
        card = market_card(RealEstateOffer((RealEstateType.CONDO,), 2))
        state = give_assets(basic_game, "p1", house_asset())
        state = set_phase(state, TurnPhase.MAKE_DECISION, active(card))

        with pytest.raises(RuleViolation):
            sell_asset_to_market(state, "p1", "asset-h")

    def test_unknown_asset(self, basic_game):
        state = set_phase(basic_game, TurnPhase.MAKE_DECISION, active(price_change_card()))
        with pytest.raises(RuleViolation):
            sell_asset_to_market(state, "p1", "asset-404")


class TestDoodad:
    def test_flat_cost(self, basic_game):
        state = resolve_doodad(basic_game, doodad_card(cost=300), "p1")
        assert state.get_player("p1").cash == 100

    def test_percent_of_income(self, basic_game):
        state = resolve_doodad(basic_game, doodad_card(cost=10, percent=True), "p1")
        assert state.get_player("p1").cash == 400 - 330

    def test_may_leave_cash_negative(self, basic_game):
        state = resolve_doodad(basic_game, doodad_card(cost=3000), "p1")
        assert state.get_player("p1").cash == -2600


class TestStockSplit:
    """Splits apply to every holder at once."""

    def test_split_doubles_shares(self, basic_game):
        state = give_assets(basic_game, "p1", stock_asset(symbol="OK4U", shares=10, price=5))
        state = give_assets(state, "p2", stock_asset(symbol="OK4U", shares=3, price=20))

        state = resolve_stock_split(state, split_card("OK4U", 2).deal)

        p1_stock = state.get_player("p1").statement.assets[0]
        p2_stock = state.get_player("p2").statement.assets[0]
        assert (p1_stock.shares, p1_stock.cost_per_share) == (20, 2.5)
        assert (p2_stock.shares, p2_stock.cost_per_share) == (6, 10)
        assert state.log[-1].event_type == EventType.STOCK_SPLIT

    def test_reverse_split_rounds_down(self, basic_game):
        state = give_assets(basic_game, "p1", stock_asset(symbol="GRO4US", shares=5))
        state = resolve_stock_split(state, split_card("GRO4US", 0.5).deal)
        assert state.get_player("p1").statement.assets[0].shares == 2

    def test_reverse_split_to_zero_removes_holding(self, basic_game):
        state = give_assets(basic_game, "p1", stock_asset(symbol="GRO4US", shares=1))
        state = resolve_stock_split(state, split_card("GRO4US", 0.5).deal)
        assert state.get_player("p1").statement.assets == ()

    def test_other_symbols_untouched(self, basic_game):
        state = give_assets(basic_game, "p1", stock_asset(symbol="ON2U", shares=10))
        state = resolve_stock_split(state, split_card("OK4U", 2).deal)
        assert state.get_player("p1").statement.assets[0].shares == 10
