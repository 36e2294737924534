"""
Main game engine.

``apply_action`` is the single state transition: it validates an action,
dispatches it to one handler per action type, settles any negative cash
with forced loans, and returns the next state. The input state is never
modified.
"""

import logging
import math
import random
import uuid
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Sequence

from cashflow.actions import (
    Action,
    ActionType,
    BuyAsset,
    ChooseDealType,
    ChooseDream,
    OfferDealToPlayer,
    PayOffLoan,
    RollDice,
    SellToMarket,
    TakeLoan,
)
from cashflow.board import (
    count_pay_days_passed,
    get_dice_total,
    get_fast_track_space,
    get_space,
    move_fast_track_player,
    move_player,
)
from cashflow.card_data import create_decks
from cashflow.cards import ActiveCard, BusinessDeal, CardKind, DealSize, RealEstateDeal, StockSplit
from cashflow.config import DEFAULT_CONFIG, GameConfig
from cashflow.exceptions import RuleViolation, ValidationError
from cashflow.finance import (
    add_child,
    auto_take_loan_if_needed,
    calculate_bank_loan_payment,
    calculate_cash_flow,
    calculate_passive_income,
    calculate_total_expenses,
    can_escape_rat_race,
    charity_donation,
    execute_bankruptcy,
    pay_off_bank_loan,
    pay_off_liability,
    process_pay_day,
    take_bank_loan,
)
from cashflow.money import SYSTEM_PLAYER_ID, EventType, add_log, format_money
from cashflow.player import LiabilityName, Player, PlayerState
from cashflow.professions import ProfessionCard, create_player_state
from cashflow.resolver import (
    resolve_buy_deal,
    resolve_doodad,
    resolve_market,
    resolve_stock_split,
    sell_asset_to_market,
)
from cashflow.rules import validate_action
from cashflow.spaces import DREAMS, FastTrackSpaceType, SpaceType
from cashflow.state import GameState, PendingPlayerDeal, TurnPhase

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, Action, random.Random], GameState]


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one action: the next state and whether the action took effect."""

    state: GameState
    accepted: bool
    reason: Optional[str] = None


# ---------------------------------------------------------------------------
# Game creation
# ---------------------------------------------------------------------------


def create_game(
    players: Sequence[Player],
    professions: Sequence[ProfessionCard],
    config: Optional[GameConfig] = None,
) -> GameState:
    """
    Start a new game.

    Player ``i`` takes profession ``i``. Decks are shuffled with
    ``config.seed``; when no seed is given a fresh one is drawn and kept on
    the state so the game can be replayed.

    Raises:
        ValidationError: no players, too many players, too few professions
            or duplicate player ids
    """
    config = config or DEFAULT_CONFIG

    if len(players) < max(1, config.min_players):
        raise ValidationError(f"At least {max(1, config.min_players)} player(s) required")
    if len(players) > config.max_players:
        raise ValidationError(f"At most {config.max_players} players allowed, got {len(players)}")
    if len(professions) < len(players):
        raise ValidationError(f"{len(players)} players need {len(players)} professions, got {len(professions)}")
    ids = [p.player_id for p in players]
    if len(set(ids)) != len(ids):
        raise ValidationError("Player ids must be unique")

    seed = config.seed if config.seed is not None else random.SystemRandom().randrange(2**32)
    rng = random.Random(seed)

    state = GameState(
        players=tuple(
            create_player_state(p.player_id, p.name, profession) for p, profession in zip(players, professions)
        ),
        decks=create_decks(rng),
        game_id=f"game-{uuid.uuid4().hex[:12]}",
        seed=seed,
        config=config,
    )
    logger.info(f"Created game {state.game_id} with {len(players)} players (seed={seed})")
    return add_log(state, SYSTEM_PLAYER_ID, "Game started!", EventType.GAME_START)


# ---------------------------------------------------------------------------
# Action processing
# ---------------------------------------------------------------------------


def _default_rng(state: GameState) -> random.Random:
    """Reshuffle source derived from the state, so replays shuffle identically."""
    return random.Random(f"{state.seed}-{state.turn_number}-{len(state.log)}")


def apply_action(state: GameState, action: Action, rng: Optional[random.Random] = None) -> ActionResult:
    """
    Apply an action to a game state.

    Structural and phase errors come back as a rejected result whose state
    carries one "Invalid action" log entry. Rule violations raised while
    handling (not enough cash, bad loan amount, ...) come back as a
    rejected result with the input state unchanged.
    """
    if not isinstance(action, Action):
        return ActionResult(state, False, "Unknown action")

    validation = validate_action(state, action)
    if not validation.valid:
        logger.info(f"Rejected {action.action_type.value} from {action.player_id}: {validation.error}")
        rejected = add_log(
            state, action.player_id, f"Invalid action: {validation.error}", EventType.INVALID_ACTION
        )
        return ActionResult(rejected, False, validation.error)

    handler = ACTION_HANDLERS.get(action.action_type)
    if handler is None:
        return ActionResult(state, False, "Unknown action")

    logger.debug(f"Dispatching {action.action_type.value} for {action.player_id}")
    try:
        next_state = handler(state, action, rng or _default_rng(state))
        next_state = _settle(state, next_state)
    except RuleViolation as e:
        logger.info(f"Rule violation on {action.action_type.value} from {action.player_id}: {e.reason}")
        return ActionResult(state, False, e.reason)

    return ActionResult(next_state, True)


def process_action(state: GameState, action: Action, rng: Optional[random.Random] = None) -> GameState:
    """Apply an action and return only the resulting state."""
    return apply_action(state, action, rng).state


def _settle(before: GameState, after: GameState) -> GameState:
    """
    Cover negative cash with forced loans and flag players who can escape.

    Only players whose cash or statement changed are looked at. If the
    player whose turn it was needed a forced loan and is left with negative
    cash flow, the turn moves to the bankruptcy decision.
    """
    config = after.config
    acting_id = before.current_player.player_id
    acting_forced = False

    for player in after.players:
        prior = before.get_player(player.player_id)
        if prior is not None and prior.cash == player.cash and prior.statement == player.statement:
            continue

        player, borrowed = auto_take_loan_if_needed(player, config)
        if borrowed:
            after = add_log(
                after.with_player(player),
                player.player_id,
                f"Forced bank loan of {format_money(borrowed)} (cash was negative).",
                EventType.FORCED_LOAN,
            )
            acting_forced = acting_forced or player.player_id == acting_id

        if (
            not player.has_escaped
            and not player.in_fast_track
            and not player.is_bankrupt
            and can_escape_rat_race(player, config)
        ):
            player = replace(player, has_escaped=True)
            after = add_log(
                after.with_player(player),
                player.player_id,
                f"Passive income ({format_money(calculate_passive_income(player.statement))}) exceeds "
                f"expenses ({format_money(calculate_total_expenses(player, config))})! "
                f"{player.name} can escape the rat race!",
                EventType.ESCAPE,
            )

    if acting_forced and not after.is_over:
        acting = after.get_player(acting_id)
        if calculate_cash_flow(acting, config) < 0:
            after = replace(after, turn_phase=TurnPhase.BANKRUPTCY_DECISION)
            after = add_log(
                after, acting_id, f"{acting.name} cannot cover expenses and must declare bankruptcy.",
                EventType.BANKRUPTCY,
            )
    return after


def _discard_active(state: GameState) -> GameState:
    card = state.active_card
    if card is None:
        return state
    return replace(state, decks=state.decks.discard(card.kind, card.card), active_card=None)


def _declare_winner(state: GameState, player: PlayerState, message: str) -> GameState:
    state = state.with_player(replace(player, has_won=True))
    state = add_log(state, player.player_id, f"WINNER! {player.name} {message}", EventType.GAME_END)
    logger.info(f"Game {state.game_id} won by {player.player_id}")
    return replace(state, winner=player.player_id, turn_phase=TurnPhase.GAME_OVER)


# ---------------------------------------------------------------------------
# Rat race
# ---------------------------------------------------------------------------


def _handle_roll_dice(state: GameState, action: RollDice, rng: random.Random) -> GameState:
    player = state.current_player
    dice = (action.dice_values[0], action.dice_values[1])

    if player.in_fast_track:
        return _fast_track_roll(state, dice, rng)

    use_both = player.charity_turns_left > 0 and action.use_both_dice
    total = get_dice_total(dice, use_both)
    new_position = move_player(player.position, total)
    pay_days = count_pay_days_passed(player.position, new_position, total)

    player = replace(
        player,
        position=new_position,
        charity_turns_left=max(0, player.charity_turns_left - 1),
    )
    state = replace(state.with_player(player), dice_result=dice)
    rolled = f"{dice[0]}+{dice[1]}={total}" if use_both else str(total)
    state = add_log(
        state,
        player.player_id,
        f"Rolled {rolled}, moved to space {new_position} ({get_space(new_position).name})",
        EventType.DICE_ROLL,
    )

    if pay_days:
        state = replace(state, turn_phase=TurnPhase.PAY_DAY_COLLECTION, pay_days_pending=pay_days)
        plural = "s" if pay_days > 1 else ""
        return add_log(state, player.player_id, f"Passed {pay_days} PayDay{plural}!", EventType.PAY_DAY)

    return _resolve_space(state, rng)


def _resolve_space(state: GameState, rng: random.Random) -> GameState:
    """Apply the Rat Race space the current player stands on."""
    player = state.current_player
    config = state.config
    space_type = get_space(player.position).space_type

    if space_type in (SpaceType.DEAL, SpaceType.CHARITY):
        return replace(state, turn_phase=TurnPhase.RESOLVE_SPACE)

    if space_type == SpaceType.MARKET:
        card, decks = state.decks.draw(CardKind.MARKET, rng)
        state = replace(state, decks=decks, active_card=ActiveCard(CardKind.MARKET, card))
        state = add_log(state, player.player_id, f"Drew market card: {card.title}", EventType.CARD_DRAW)
        return resolve_market(state, card)

    if space_type == SpaceType.DOODAD:
        card, decks = state.decks.draw(CardKind.DOODAD, rng)
        state = replace(
            state,
            decks=decks,
            active_card=ActiveCard(CardKind.DOODAD, card),
            turn_phase=TurnPhase.MAKE_DECISION,
        )
        return add_log(state, player.player_id, f"Doodad! {card.title}: {card.description}", EventType.CARD_DRAW)

    if space_type == SpaceType.BABY:
        updated = add_child(player, config)
        children = updated.statement.expenses.child_count
        if children > player.statement.expenses.child_count:
            message = (
                f"Had a baby! Now has {children} child(ren). Child expenses: "
                f"{format_money(updated.statement.expenses.per_child_expense)}/child/month"
            )
        else:
            message = f"Already has {config.max_children} children, no more babies!"
        state = add_log(state.with_player(updated), player.player_id, message, EventType.BABY)
        return replace(state, turn_phase=TurnPhase.END_OF_TURN)

    if space_type == SpaceType.DOWNSIZED:
        expenses = calculate_total_expenses(player, config)
        player = replace(player, cash=player.cash - expenses, downsized_turns_left=config.downsized_turns)
        state = add_log(
            state.with_player(player),
            player.player_id,
            f"Downsized! Paid total expenses {format_money(expenses)} and loses {config.downsized_turns} turns.",
            EventType.DOWNSIZED,
        )
        return replace(state, turn_phase=TurnPhase.END_OF_TURN)

    # PayDay: already collected while moving
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_collect_pay_day(state: GameState, action: Action, rng: random.Random) -> GameState:
    player = state.current_player
    count = state.pay_days_pending or 1
    cash_flow = calculate_cash_flow(player, state.config)
    player = process_pay_day(player, count, state.config)

    times = f" x{count}" if count > 1 else ""
    state = add_log(
        state.with_player(player),
        player.player_id,
        f"PayDay! Collected cash flow: {format_money(cash_flow)}{times}. Cash: {format_money(player.cash)}",
        EventType.PAY_DAY,
    )
    if player.cash < 0 and cash_flow < 0:
        # Bankruptcy is settled first; the landing space is forfeited
        return replace(state, pay_days_pending=0, turn_phase=TurnPhase.END_OF_TURN)
    state = replace(state, pay_days_pending=0, turn_phase=TurnPhase.RESOLVE_SPACE)
    return _resolve_space(state, rng)


def _handle_choose_deal_type(state: GameState, action: ChooseDealType, rng: random.Random) -> GameState:
    kind = CardKind.SMALL_DEAL if action.deal_type == DealSize.SMALL.value else CardKind.BIG_DEAL
    card, decks = state.decks.draw(kind, rng)
    state = replace(state, decks=decks, active_card=ActiveCard(kind, card))

    if isinstance(card.deal, StockSplit):
        state = add_log(state, action.player_id, f"Drew stock split card: {card.title}", EventType.CARD_DRAW)
        state = resolve_stock_split(state, card.deal)
        return replace(_discard_active(state), turn_phase=TurnPhase.END_OF_TURN)

    state = add_log(state, action.player_id, f"Drew {action.deal_type} deal: {card.title}", EventType.CARD_DRAW)
    return replace(state, turn_phase=TurnPhase.MAKE_DECISION)


def _handle_buy_asset(state: GameState, action: BuyAsset, rng: random.Random) -> GameState:
    active = state.active_card
    buyer = state.current_player
    state = resolve_buy_deal(state, active.card, action.player_id, shares=action.shares)
    state = _discard_active(state)

    deal = active.card.deal
    if buyer.in_fast_track and isinstance(deal, (RealEstateDeal, BusinessDeal)):
        config = state.config
        gain = deal.cash_flow * config.fast_track_multiplier
        player = state.get_player(buyer.player_id)
        player = replace(player, fast_track_cash_flow=player.fast_track_cash_flow + gain)
        state = add_log(
            state.with_player(player),
            player.player_id,
            f"[Fast Track] Cash flow increased by {format_money(gain)}/mo "
            f"(total: {format_money(player.fast_track_cash_flow)}/mo)",
            EventType.FAST_TRACK,
        )
        if player.fast_track_cash_flow >= config.fast_track_win_cash_flow:
            return _declare_winner(
                state, player, f"reached {format_money(player.fast_track_cash_flow)}/mo cash flow and wins the game!"
            )

    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_skip_deal(state: GameState, action: Action, rng: random.Random) -> GameState:
    state = add_log(_discard_active(state), action.player_id, "Passed on the deal.")
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_pay_expense(state: GameState, action: Action, rng: random.Random) -> GameState:
    state = resolve_doodad(state, state.active_card.card, action.player_id)
    return replace(_discard_active(state), turn_phase=TurnPhase.END_OF_TURN)


def _handle_accept_charity(state: GameState, action: Action, rng: random.Random) -> GameState:
    config = state.config
    player = state.current_player
    donation = charity_donation(player, config)
    player = replace(player, cash=player.cash - donation, charity_turns_left=config.charity_turns)
    state = add_log(
        state.with_player(player),
        player.player_id,
        f"Donated {format_money(donation)} to charity. Can choose 1 or 2 dice for {config.charity_turns} turns.",
        EventType.CHARITY,
    )
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_decline_charity(state: GameState, action: Action, rng: random.Random) -> GameState:
    state = add_log(state, action.player_id, "Declined charity.", EventType.CHARITY)
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_take_loan(state: GameState, action: TakeLoan, rng: random.Random) -> GameState:
    player = take_bank_loan(state.current_player, action.amount, state.config)
    payment = calculate_bank_loan_payment(player, state.config)
    return add_log(
        state.with_player(player),
        player.player_id,
        f"Took bank loan of {format_money(action.amount)}. Monthly payment: {format_money(payment)}",
        EventType.LOAN,
    )


def _handle_pay_off_loan(state: GameState, action: PayOffLoan, rng: random.Random) -> GameState:
    player = state.current_player
    if action.loan_type == LiabilityName.BANK_LOAN:
        player = pay_off_bank_loan(player, action.amount, state.config)
        message = (
            f"Paid off {format_money(action.amount)} of bank loan. "
            f"Remaining: {format_money(player.bank_loan_amount)}"
        )
    else:
        player = pay_off_liability(player, action.loan_type, action.amount)
        message = f"Paid {format_money(action.amount)} toward {action.loan_type}"
    return add_log(state.with_player(player), player.player_id, message, EventType.LOAN_PAYOFF)


def _handle_end_turn(state: GameState, action: Action, rng: random.Random) -> GameState:
    """
    Pass the turn to the next player who can play.

    Eliminated players are skipped. A player serving a downsized or
    bankruptcy penalty has one turn of it consumed; they sit out while turns
    remain and take this turn once the counter reaches zero.
    """
    state = replace(_discard_active(state), dice_result=None, pay_days_pending=0, pending_player_deal=None)
    count = len(state.players)
    start = state.current_player_index
    index = start
    chosen = None

    for _ in range(count):
        index = (index + 1) % count
        player = state.players[index]
        if player.is_bankrupt:
            continue
        if player.bankrupt_turns_left > 0:
            player = replace(player, bankrupt_turns_left=player.bankrupt_turns_left - 1)
            if player.bankrupt_turns_left > 0:
                state = add_log(
                    state.with_player(player),
                    player.player_id,
                    f"Still recovering from bankruptcy ({player.bankrupt_turns_left} turns left)",
                )
                continue
            state = add_log(state.with_player(player), player.player_id, "Recovered from bankruptcy!")
        elif player.downsized_turns_left > 0:
            player = replace(player, downsized_turns_left=player.downsized_turns_left - 1)
            if player.downsized_turns_left > 0:
                state = add_log(
                    state.with_player(player),
                    player.player_id,
                    f"Still downsized ({player.downsized_turns_left} turns left)",
                )
                continue
            state = add_log(state.with_player(player), player.player_id, "Back from being downsized!")
        chosen = index
        break

    if chosen is None:
        # Everyone was skipped: fall back to the next player still in the game
        chosen = next(
            (
                (start + step) % count
                for step in range(1, count + 1)
                if not state.players[(start + step) % count].is_bankrupt
            ),
            None,
        )

    if chosen is None:
        state = add_log(state, SYSTEM_PLAYER_ID, "Every player is bankrupt. Game over.", EventType.GAME_END)
        return replace(state, turn_phase=TurnPhase.GAME_OVER, winner=None)

    state = replace(
        state,
        current_player_index=chosen,
        turn_phase=TurnPhase.ROLL_DICE,
        turn_number=state.turn_number + 1,
    )
    return add_log(state, state.current_player.player_id, f"{state.current_player.name}'s turn.")


def _handle_sell_to_market(state: GameState, action: SellToMarket, rng: random.Random) -> GameState:
    # Stay in MAKE_DECISION so more matching assets can be sold
    return sell_asset_to_market(state, action.player_id, action.asset_id)


def _handle_decline_market(state: GameState, action: Action, rng: random.Random) -> GameState:
    state = add_log(_discard_active(state), action.player_id, "Done with the market.", EventType.MARKET)
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_declare_bankruptcy(state: GameState, action: Action, rng: random.Random) -> GameState:
    player, eliminated = execute_bankruptcy(state.current_player, state.config)
    if eliminated:
        message = f"{player.name} is bankrupt and eliminated from the game!"
    else:
        message = (
            f"{player.name} declared bankruptcy! Assets sold, some debts halved. "
            f"Loses {player.bankrupt_turns_left} turns."
        )
    logger.info(f"Player {player.player_id} declared bankruptcy (eliminated={eliminated})")
    state = add_log(state.with_player(player), player.player_id, message, EventType.BANKRUPTCY)
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


# ---------------------------------------------------------------------------
# Deals between players
# ---------------------------------------------------------------------------


def _handle_offer_deal(state: GameState, action: OfferDealToPlayer, rng: random.Random) -> GameState:
    card = state.active_card.card
    seller = state.get_player(action.player_id)
    buyer = state.get_player(action.target_player_id)
    pending = PendingPlayerDeal(
        seller_id=seller.player_id,
        buyer_id=buyer.player_id,
        deal=card.deal,
        asking_price=action.asking_price,
        shares=action.shares,
    )
    state = replace(state, pending_player_deal=pending, turn_phase=TurnPhase.WAITING_FOR_DEAL_RESPONSE)
    return add_log(
        state,
        seller.player_id,
        f'{seller.name} offers deal "{card.title}" to {buyer.name} for {format_money(action.asking_price)}',
        EventType.DEAL_OFFERED,
    )


def _handle_accept_player_deal(state: GameState, action: Action, rng: random.Random) -> GameState:
    pending = state.pending_player_deal
    buyer = state.get_player(pending.buyer_id)
    seller = state.get_player(pending.seller_id)

    state = state.with_player(replace(buyer, cash=buyer.cash - pending.asking_price))
    state = state.with_player(replace(seller, cash=seller.cash + pending.asking_price))
    state = resolve_buy_deal(state, state.active_card.card, buyer.player_id, shares=pending.shares, skip_payment=True)
    state = add_log(
        state,
        buyer.player_id,
        f"{buyer.name} accepted the deal for {format_money(pending.asking_price)}!",
        EventType.DEAL_ACCEPTED,
    )
    state = replace(_discard_active(state), pending_player_deal=None)
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


def _handle_decline_player_deal(state: GameState, action: Action, rng: random.Random) -> GameState:
    buyer = state.get_player(state.pending_player_deal.buyer_id)
    state = replace(state, pending_player_deal=None, turn_phase=TurnPhase.MAKE_DECISION)
    return add_log(state, buyer.player_id, f"{buyer.name} declined the deal offer.", EventType.DEAL_DECLINED)


# ---------------------------------------------------------------------------
# Fast track
# ---------------------------------------------------------------------------


def _handle_choose_dream(state: GameState, action: ChooseDream, rng: random.Random) -> GameState:
    if action.dream not in DREAMS:
        raise RuleViolation(f"Unknown dream: {action.dream}")

    player = state.get_player(action.player_id)
    rate = int(calculate_passive_income(player.statement) * state.config.fast_track_multiplier)
    player = replace(
        player,
        dream=action.dream,
        in_fast_track=True,
        fast_track_position=0,
        fast_track_cash_flow=rate,
    )
    return add_log(
        state.with_player(player),
        player.player_id,
        f'Chose dream "{action.dream}" and moved to the Fast Track! '
        f"Fast Track cash flow: {format_money(rate)}/mo",
        EventType.DREAM,
    )


def _fast_track_roll(state: GameState, dice, rng: random.Random) -> GameState:
    player = state.current_player
    total = dice[0] + dice[1]
    new_position = move_fast_track_player(player.fast_track_position, total)
    player = replace(player, fast_track_position=new_position)
    state = replace(state.with_player(player), dice_result=dice)
    state = add_log(
        state,
        player.player_id,
        f"[Fast Track] Rolled {dice[0]}+{dice[1]}={total}, moved to {get_fast_track_space(new_position).name}",
        EventType.DICE_ROLL,
    )
    return _resolve_fast_track_space(state, rng)


def _resolve_fast_track_space(state: GameState, rng: random.Random) -> GameState:
    """Apply the Fast Track space the current player stands on."""
    player = state.current_player
    config = state.config
    space = get_fast_track_space(player.fast_track_position)
    space_type = space.space_type
    rate = player.fast_track_cash_flow

    if space_type == FastTrackSpaceType.CASH_FLOW_DAY:
        player = replace(player, cash=player.cash + rate)
        state = add_log(
            state.with_player(player),
            player.player_id,
            f"[Fast Track] Cash Flow Day! Collected {format_money(rate)}",
            EventType.FAST_TRACK,
        )
        if rate >= config.fast_track_win_cash_flow:
            return _declare_winner(state, player, f"reached {format_money(rate)}/mo cash flow and wins the game!")
        return replace(state, turn_phase=TurnPhase.END_OF_TURN)

    if space_type == FastTrackSpaceType.BUSINESS_DEAL:
        card, decks = state.decks.draw(CardKind.BIG_DEAL, rng)
        state = replace(
            state,
            decks=decks,
            active_card=ActiveCard(CardKind.BIG_DEAL, card),
            turn_phase=TurnPhase.MAKE_DECISION,
        )
        return add_log(
            state, player.player_id, f"[Fast Track] Business Deal opportunity: {card.title}", EventType.CARD_DRAW
        )

    if space_type == FastTrackSpaceType.CHARITY:
        return replace(state, turn_phase=TurnPhase.RESOLVE_SPACE)

    if space_type == FastTrackSpaceType.TAX:
        tax = rate // 2
        player = replace(player, cash=player.cash - tax)
        message = f"[Fast Track] Tax Audit! Paid {format_money(tax)} in taxes (50% of cash flow)"
    elif space_type == FastTrackSpaceType.LAWSUIT:
        loss = math.floor(player.cash / 2)
        player = replace(player, cash=player.cash - loss)
        message = f"[Fast Track] Lawsuit! Lost {format_money(loss)} (half of cash on hand)"
    elif space_type == FastTrackSpaceType.DIVORCE:
        cash_loss = math.floor(player.cash / 2)
        rate_loss = rate // 2
        player = replace(player, cash=player.cash - cash_loss, fast_track_cash_flow=rate - rate_loss)
        message = (
            f"[Fast Track] Divorce! Lost {format_money(cash_loss)} cash "
            f"and {format_money(rate_loss)}/mo cash flow"
        )
    elif space_type == FastTrackSpaceType.DREAM:
        if space.dream == player.dream:
            return _declare_winner(state, player, f'landed on their dream "{player.dream}" and wins the game!')
        message = f'[Fast Track] Landed on dream "{space.dream}" (not your dream: "{player.dream}")'
    else:
        message = f"[Fast Track] Landed on {space.name}"

    state = add_log(state.with_player(player), player.player_id, message, EventType.FAST_TRACK)
    return replace(state, turn_phase=TurnPhase.END_OF_TURN)


ACTION_HANDLERS: Dict[ActionType, Handler] = {
    ActionType.ROLL_DICE: _handle_roll_dice,
    ActionType.CHOOSE_DEAL_TYPE: _handle_choose_deal_type,
    ActionType.BUY_ASSET: _handle_buy_asset,
    ActionType.SKIP_DEAL: _handle_skip_deal,
    ActionType.PAY_EXPENSE: _handle_pay_expense,
    ActionType.ACCEPT_CHARITY: _handle_accept_charity,
    ActionType.DECLINE_CHARITY: _handle_decline_charity,
    ActionType.TAKE_LOAN: _handle_take_loan,
    ActionType.PAY_OFF_LOAN: _handle_pay_off_loan,
    ActionType.END_TURN: _handle_end_turn,
    ActionType.COLLECT_PAY_DAY: _handle_collect_pay_day,
    ActionType.SELL_TO_MARKET: _handle_sell_to_market,
    ActionType.DECLINE_MARKET: _handle_decline_market,
    ActionType.DECLARE_BANKRUPTCY: _handle_declare_bankruptcy,
    ActionType.OFFER_DEAL_TO_PLAYER: _handle_offer_deal,
    ActionType.ACCEPT_PLAYER_DEAL: _handle_accept_player_deal,
    ActionType.DECLINE_PLAYER_DEAL: _handle_decline_player_deal,
    ActionType.CHOOSE_DREAM: _handle_choose_dream,
}
