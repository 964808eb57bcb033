from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from expense_settlement.domain.errors import ValidationError


class EvenSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal["even"] = "even"
    involved: tuple[str, ...]

    @field_validator("involved")
    @classmethod
    def dedupe_involved(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        # Keeps first-seen order.
        return tuple(dict.fromkeys(v))


class ManualSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal["manual"] = "manual"
    contributions: dict[str, float]
    # Defaults to the contributors when not given.
    involved: tuple[str, ...] = ()

    @field_validator("involved")
    @classmethod
    def dedupe_involved(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(v))

    @model_validator(mode="before")
    @classmethod
    def involved_defaults_to_contributors(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("involved"):
            data = {**data, "involved": list(data.get("contributions") or {})}
        return data


Split = Annotated[Union[EvenSplit, ManualSplit], Field(discriminator="mode")]


class Expense(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    payer: str
    amount: float
    split: Split

    @property
    def involved(self) -> tuple[str, ...]:
        return self.split.involved

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Expense:
        """
        Build an expense from the loose record shape used by entry forms:

          {id, name, payer, amount, involvedParticipants,
           splitEvenly, manualContributions}

        splitEvenly wins over manualContributions. A record with neither
        is rejected rather than treated as a zero-effect expense.
        """

        if not isinstance(record, Mapping):
            raise ValidationError("", f"expense record must be a mapping, got {type(record).__name__}")

        raw_id = record.get("id")
        expense_id = "" if raw_id is None else str(raw_id)
        involved = list(record.get("involvedParticipants") or [])

        if record.get("splitEvenly"):
            split: dict[str, Any] = {"mode": "even", "involved": involved}
        elif record.get("manualContributions") is not None:
            split = {"mode": "manual", "contributions": record["manualContributions"], "involved": involved}
        else:
            raise ValidationError(expense_id, "expense has neither an even split nor manual contributions")

        try:
            return cls(
                id=expense_id,
                name=str(record.get("name") or ""),
                payer=record.get("payer"),
                amount=record.get("amount"),
                split=split,
            )
        except PydanticValidationError as e:
            raise ValidationError(expense_id, _describe(e)) from e


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
