import random

import pytest

from cashflow.card_data import (
    BIG_DEAL_CARDS,
    DOODAD_CARDS,
    MARKET_CARDS,
    SMALL_DEAL_CARDS,
    STOCK_SYMBOLS,
    create_decks,
)
from cashflow.cards import (
    ActiveCard,
    BusinessDeal,
    CardKind,
    DeckState,
    RealEstateDeal,
    StockDeal,
    StockPriceChange,
    StockSplit,
)
from cashflow.exceptions import RuleViolation
from helpers import doodad_card, house_card, stock_card


class TestCardData:
    """Tests for the printed decks."""

    def test_deck_sizes(self):
        assert len(SMALL_DEAL_CARDS) == 30
        assert len(BIG_DEAL_CARDS) == 24
        assert len(MARKET_CARDS) == 25
        assert len(DOODAD_CARDS) == 25

    def test_card_ids_unique(self):
        ids = [c.card_id for c in SMALL_DEAL_CARDS + BIG_DEAL_CARDS + MARKET_CARDS + DOODAD_CARDS]
        assert len(ids) == len(set(ids))

    def test_stock_symbols_are_known(self):
        for card in SMALL_DEAL_CARDS:
            if isinstance(card.deal, (StockDeal, StockSplit)):
                assert card.deal.symbol in STOCK_SYMBOLS
        for card in MARKET_CARDS:
            if isinstance(card.effect, StockPriceChange):
                assert card.effect.symbol in STOCK_SYMBOLS

    def test_small_deals_mix(self):
        splits = [c for c in SMALL_DEAL_CARDS if isinstance(c.deal, StockSplit)]
        assert {c.deal.split_ratio for c in splits} == {2, 0.5}
        assert any(isinstance(c.deal, RealEstateDeal) for c in SMALL_DEAL_CARDS)

    def test_big_deals_are_property_or_business(self):
        for card in BIG_DEAL_CARDS:
            assert isinstance(card.deal, (RealEstateDeal, BusinessDeal))
            assert card.deal.down_payment > 0

    def test_one_percentage_doodad(self):
        percent = [c for c in DOODAD_CARDS if c.is_percent_of_income]
        assert len(percent) == 1
        assert percent[0].cost == 10


class TestCreateDecks:
    def test_same_seed_same_order(self):
        assert create_decks(random.Random(7)) == create_decks(random.Random(7))

    def test_different_seed_different_order(self):
        assert create_decks(random.Random(1)).small_deal_deck != create_decks(random.Random(2)).small_deal_deck

    def test_every_card_present(self):
        decks = create_decks(random.Random(3))
        assert sorted(c.card_id for c in decks.market_deck) == sorted(c.card_id for c in MARKET_CARDS)
        assert decks.market_discard == ()


class TestDeckState:
    """Tests for drawing and discarding."""

    def test_draw_takes_top_card(self):
        first, second = stock_card(card_id="a"), stock_card(card_id="b")
        decks = DeckState(small_deal_deck=(first, second))

        card, after = decks.draw(CardKind.SMALL_DEAL, random.Random(0))

        assert card is first
        assert after.small_deal_deck == (second,)
        assert decks.small_deal_deck == (first, second)

    def test_empty_deck_reshuffles_discards(self):
        cards = tuple(doodad_card(card_id=f"d{i}") for i in range(5))
        decks = DeckState(doodad_discard=cards)

        card, after = decks.draw(CardKind.DOODAD, random.Random(0))

        assert card in cards
        assert after.doodad_discard == ()
        assert len(after.doodad_deck) == 4
        assert after.total_cards(CardKind.DOODAD) + 1 == 5

    def test_both_piles_empty(self):
        with pytest.raises(RuleViolation):
            DeckState().draw(CardKind.MARKET, random.Random(0))

    def test_discard(self):
        card = house_card()
        decks = DeckState().discard(CardKind.SMALL_DEAL, card)
        assert decks.discard_pile(CardKind.SMALL_DEAL) == (card,)
        assert decks.pile(CardKind.SMALL_DEAL) == ()

    def test_active_card_is_deal(self):
        assert ActiveCard(CardKind.BIG_DEAL, house_card()).is_deal
        assert not ActiveCard(CardKind.DOODAD, doodad_card()).is_deal
