"""
Wire schemas for inbound actions.

Clients send camelCase JSON such as
``{"type": "ROLL_DICE", "playerId": "p1", "diceValues": [3, 4]}``;
``parse_action`` turns it into one of the action dataclasses.
"""

from dataclasses import MISSING, fields
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from cashflow.actions import ACTION_CLASSES, Action, ActionType
from cashflow.exceptions import ValidationError


class ActionPayload(BaseModel):
    """One action as sent over the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    action_type: ActionType = Field(alias="type")
    player_id: str = Field(min_length=1)

    dice_values: Optional[List[int]] = Field(default=None, min_length=2, max_length=2)
    use_both_dice: Optional[bool] = None
    deal_type: Optional[str] = None
    shares: Optional[int] = None
    amount: Optional[int] = None
    loan_type: Optional[str] = None
    asset_id: Optional[str] = None
    target_player_id: Optional[str] = None
    asking_price: Optional[int] = None
    dream: Optional[str] = None

    def to_action(self) -> Action:
        """
        Build the typed action for this payload.

        Raises:
            ValidationError: a field the action type requires is missing
        """
        action_cls = ACTION_CLASSES[self.action_type]
        kwargs: Dict[str, Any] = {}
        missing = []
        for f in fields(action_cls):
            value = getattr(self, f.name, None)
            if value is None:
                if f.default is MISSING and f.default_factory is MISSING:
                    missing.append(f.name)
                continue
            kwargs[f.name] = tuple(value) if f.name == "dice_values" else value

        if missing:
            raise ValidationError(f"{self.action_type.value} requires: {', '.join(missing)}")
        return action_cls(**kwargs)


def parse_action(data: Dict[str, Any]) -> Action:
    """
    Parse a raw wire dict into an action.

    Raises:
        ValidationError: the payload is malformed or incomplete
    """
    try:
        payload = ActionPayload.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid action payload: {e.errors()[0]['msg']}") from e
    return payload.to_action()
