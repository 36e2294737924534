import pytest

from cashflow.actions import AcceptCharity, ActionType, BuyAsset, ChooseDealType, ChooseDream, EndTurn, RollDice
from cashflow.game import apply_action, process_action
from cashflow.money import EventType
from cashflow.rules import get_valid_actions
from cashflow.state import TurnPhase
from helpers import business_card, set_player, with_decks


@pytest.fixture
def fast_track_game(basic_game):
    """Alice on the Fast Track at Cash Flow Day with a 10,000/month rate."""
    return set_player(
        basic_game,
        "p1",
        has_escaped=True,
        in_fast_track=True,
        dream="Private Jet",
        fast_track_position=0,
        fast_track_cash_flow=10000,
        cash=20000,
    )


class TestEscapeAndDream:
    """Tests for leaving the Rat Race."""

    def _escaped(self, basic_game):
        state = set_player(basic_game, "p1", position=2, cash=50000)
        state = with_decks(state, big_deal_deck=(business_card(down=10000, cash_flow=2400),))
        state = process_action(state, RollDice("p1", (1, 1)))
        state = process_action(state, ChooseDealType("p1", "big"))
        return process_action(state, BuyAsset("p1"))

    def test_passive_income_over_expenses_escapes(self, basic_game):
        state = self._escaped(basic_game)

        assert state.current_player.has_escaped
        assert not state.current_player.in_fast_track
        assert EventType.ESCAPE in [e.event_type for e in state.log]
        assert get_valid_actions(state) == [ActionType.CHOOSE_DREAM]

    def test_choose_dream_enters_fast_track(self, basic_game):
        state = process_action(self._escaped(basic_game), ChooseDream("p1", "Private Jet"))
        player = state.current_player

        assert player.in_fast_track
        assert player.dream == "Private Jet"
        assert player.fast_track_position == 0
        assert player.fast_track_cash_flow == 240000
        assert get_valid_actions(state) == [ActionType.END_TURN]

    def test_unknown_dream_rejected(self, basic_game):
        state = self._escaped(basic_game)
        result = apply_action(state, ChooseDream("p1", "Moon Base"))

        assert not result.accepted
        assert result.state is state
        assert not state.current_player.in_fast_track

    def test_dream_not_allowed_before_escape(self, basic_game):
        result = apply_action(basic_game, ChooseDream("p1", "Private Jet"))
        assert not result.accepted


class TestFastTrackSpaces:
    """Tests for each Fast Track space."""

    def test_moves_by_both_dice(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (2, 2)))
        assert state.current_player.fast_track_position == 4
        assert state.current_player.position == 0

    def test_cash_flow_day(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (2, 2)))
        assert state.current_player.cash == 30000
        assert state.turn_phase == TurnPhase.END_OF_TURN

    def test_cash_flow_day_at_target_wins(self, fast_track_game):
        state = set_player(fast_track_game, "p1", fast_track_cash_flow=50000)
        state = process_action(state, RollDice("p1", (2, 2)))

        assert state.turn_phase == TurnPhase.GAME_OVER
        assert state.winner == "p1"
        assert state.current_player.has_won

    def test_landing_on_own_dream_wins(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (2, 3)))
        assert state.winner == "p1"
        assert state.turn_phase == TurnPhase.GAME_OVER
        assert state.log[-1].event_type == EventType.GAME_END

    def test_landing_on_other_dream(self, fast_track_game):
        state = set_player(fast_track_game, "p1", dream="World Travel")
        state = process_action(state, RollDice("p1", (2, 3)))
        assert state.winner is None
        assert state.turn_phase == TurnPhase.END_OF_TURN

    def test_tax_audit(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (3, 3)))
        assert state.current_player.cash == 15000

    def test_lawsuit(self, fast_track_game):
        state = set_player(fast_track_game, "p1", cash=9001)
        state = process_action(state, RollDice("p1", (5, 5)))
        assert state.current_player.cash == 4501

    def test_divorce(self, fast_track_game):
        state = set_player(fast_track_game, "p1", fast_track_position=8, cash=10000)
        state = process_action(state, RollDice("p1", (3, 3)))
        player = state.current_player
        assert player.fast_track_position == 14
        assert player.cash == 5000
        assert player.fast_track_cash_flow == 5000

    def test_charity(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (1, 2)))
        assert state.turn_phase == TurnPhase.RESOLVE_SPACE
        assert get_valid_actions(state) == [ActionType.ACCEPT_CHARITY, ActionType.DECLINE_CHARITY]

        state = process_action(state, AcceptCharity("p1"))
        assert state.current_player.charity_turns_left == 3
        assert state.turn_phase == TurnPhase.END_OF_TURN


class TestFastTrackDeals:
    def test_business_deal_raises_rate(self, fast_track_game):
        state = with_decks(fast_track_game, big_deal_deck=(business_card(down=10000, cash_flow=100),))
        state = process_action(state, RollDice("p1", (1, 1)))
        assert state.turn_phase == TurnPhase.MAKE_DECISION

        state = process_action(state, BuyAsset("p1"))
        player = state.current_player
        assert player.cash == 10000
        assert player.fast_track_cash_flow == 20000
        assert state.turn_phase == TurnPhase.END_OF_TURN

    def test_business_deal_can_win(self, fast_track_game):
        state = with_decks(fast_track_game, big_deal_deck=(business_card(down=10000, cash_flow=500),))
        state = process_action(state, RollDice("p1", (1, 1)))
        state = process_action(state, BuyAsset("p1"))

        assert state.winner == "p1"
        assert state.turn_phase == TurnPhase.GAME_OVER

    def test_no_loans_on_fast_track(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (2, 2)))
        assert ActionType.TAKE_LOAN not in get_valid_actions(state)

    def test_actions_rejected_after_win(self, fast_track_game):
        state = process_action(fast_track_game, RollDice("p1", (2, 3)))
        result = apply_action(state, EndTurn("p1"))
        assert not result.accepted
