import pytest

from cashflow.actions import AcceptPlayerDeal, ActionType, DeclinePlayerDeal, EndTurn, OfferDealToPlayer
from cashflow.cards import CardKind
from cashflow.game import apply_action, process_action
from cashflow.money import EventType
from cashflow.rules import get_valid_actions
from cashflow.state import TurnPhase
from helpers import active, house_card, set_phase, set_player, stock_card


@pytest.fixture
def deal_in_hand(basic_game):
    """Alice holds a drawn ON2U stock deal at $5/share."""
    return set_phase(basic_game, TurnPhase.MAKE_DECISION, active(stock_card(price=5)))


class TestOffer:
    """Tests for offering a drawn deal to another player."""

    def test_offer_waits_for_buyer(self, deal_in_hand):
        state = process_action(deal_in_hand, OfferDealToPlayer("p1", "p2", 500, shares=10))

        assert state.turn_phase == TurnPhase.WAITING_FOR_DEAL_RESPONSE
        assert state.pending_player_deal.buyer_id == "p2"
        assert state.pending_player_deal.asking_price == 500
        assert state.current_player.player_id == "p1"
        assert get_valid_actions(state) == [ActionType.ACCEPT_PLAYER_DEAL, ActionType.DECLINE_PLAYER_DEAL]
        assert state.log[-1].event_type == EventType.DEAL_OFFERED

    def test_seller_cannot_answer(self, deal_in_hand):
        state = process_action(deal_in_hand, OfferDealToPlayer("p1", "p2", 500))
        assert not apply_action(state, AcceptPlayerDeal("p1")).accepted
        assert not apply_action(state, EndTurn("p1")).accepted

    def test_offer_to_self_rejected(self, deal_in_hand):
        result = apply_action(deal_in_hand, OfferDealToPlayer("p1", "p1", 500))
        assert not result.accepted


class TestAnswer:
    def test_accept_moves_exactly_the_price(self, deal_in_hand):
        state = set_player(deal_in_hand, "p2", cash=2000)
        state = process_action(state, OfferDealToPlayer("p1", "p2", 500, shares=10))
        state = process_action(state, AcceptPlayerDeal("p2"))

        buyer = state.get_player("p2")
        seller = state.get_player("p1")
        assert buyer.cash == 1500
        assert seller.cash == 900
        assert buyer.statement.assets[0].shares == 10
        assert seller.statement.assets == ()
        assert state.pending_player_deal is None
        assert state.active_card is None
        assert state.turn_phase == TurnPhase.END_OF_TURN
        assert state.current_player.player_id == "p1"
        assert len(state.decks.discard_pile(CardKind.SMALL_DEAL)) == 1

    def test_buyer_short_of_cash_gets_loan(self, basic_game):
        state = set_phase(basic_game, TurnPhase.MAKE_DECISION, active(house_card(down=5000)))
        state = set_player(state, "p2", cash=100)
        state = process_action(state, OfferDealToPlayer("p1", "p2", 500))
        state = process_action(state, AcceptPlayerDeal("p2"))

        buyer = state.get_player("p2")
        assert buyer.cash == 600
        assert buyer.bank_loan_amount == 1000
        assert len(buyer.statement.assets) == 1
        assert state.turn_phase == TurnPhase.END_OF_TURN

    def test_decline_returns_to_decision(self, deal_in_hand):
        state = process_action(deal_in_hand, OfferDealToPlayer("p1", "p2", 500))
        state = process_action(state, DeclinePlayerDeal("p2"))

        assert state.turn_phase == TurnPhase.MAKE_DECISION
        assert state.pending_player_deal is None
        assert state.active_card == deal_in_hand.active_card
        assert state.get_player("p2").cash == 400
        assert state.log[-1].event_type == EventType.DEAL_DECLINED
