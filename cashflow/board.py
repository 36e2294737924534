"""
Movement and space lookup on the Rat Race and Fast Track loops.

Both boards are closed loops of fixed length; every function here is a
pure calculation over positions.
"""

from typing import Optional, Sequence

from cashflow.spaces import (
    FAST_TRACK_SIZE,
    FAST_TRACK_SPACES,
    PAY_DAY_POSITIONS,
    RAT_RACE_SIZE,
    RAT_RACE_SPACES,
    FastTrackSpace,
    FastTrackSpaceType,
    Space,
    SpaceType,
)


def move_player(position: int, steps: int, board_size: int = RAT_RACE_SIZE) -> int:
    """Move forward on the Rat Race, wrapping to 0."""
    return (position + steps) % board_size


def move_fast_track_player(position: int, steps: int) -> int:
    """Move forward on the Fast Track."""
    return (position + steps) % FAST_TRACK_SIZE


def get_space(position: int) -> Space:
    return RAT_RACE_SPACES[position % RAT_RACE_SIZE]


def get_space_type(position: int) -> SpaceType:
    """Get the space type at a Rat Race position."""
    return RAT_RACE_SPACES[position % RAT_RACE_SIZE].space_type


def get_fast_track_space(position: int) -> FastTrackSpace:
    return FAST_TRACK_SPACES[position % FAST_TRACK_SIZE]


def get_fast_track_space_type(position: int) -> FastTrackSpaceType:
    return get_fast_track_space(position).space_type


def count_pay_days_passed(old_position: int, new_position: int, steps: Optional[int] = None) -> int:
    """
    Count PayDay spaces in (old_position, new_position], walking forward.

    Landing on a PayDay counts, and equal positions mean a full lap. When
    ``steps`` is given, every extra lap beyond the first passes each PayDay
    again, so a move longer than the board is counted correctly.
    """
    if steps is not None and steps <= 0:
        return 0

    if new_position > old_position:
        count = sum(1 for p in PAY_DAY_POSITIONS if old_position < p <= new_position)
    else:
        count = sum(1 for p in PAY_DAY_POSITIONS if p > old_position or p <= new_position)

    if steps is not None:
        forward = (new_position - old_position) % RAT_RACE_SIZE or RAT_RACE_SIZE
        count += (steps - forward) // RAT_RACE_SIZE * len(PAY_DAY_POSITIONS)
    return count


def passed_pay_day(old_position: int, new_position: int) -> bool:
    return count_pay_days_passed(old_position, new_position) > 0


def get_dice_total(dice_values: Sequence[int], use_both_dice: bool = False) -> int:
    """One die by default; the sum of both when the mover opts in."""
    if use_both_dice:
        return dice_values[0] + dice_values[1]
    return dice_values[0]
