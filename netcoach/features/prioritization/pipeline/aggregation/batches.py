"""
Interaction batch models.

Rows arrive already extracted from export files by the import
collaborator. Each batch kind has its own pydantic row model so malformed
rows are rejected at the boundary, before anything is merged.
"""

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from netcoach.features.prioritization.domain.errors import InvalidInputError

BatchKind = Literal[
    "connections",
    "messages",
    "invitations",
    "endorsements_received",
    "endorsements_given",
    "recommendations_received",
    "recommendations_given",
]


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def blank_cells_to_none(cls, data: Any) -> Any:
        # Export files leave empty cells as "" rather than omitting them
        if isinstance(data, dict):
            return {
                key: None if isinstance(value, str) and not value.strip() else value
                for key, value in data.items()
            }
        return data


class ConnectionRow(_Row):
    """A first-degree connection; the only row type that creates contacts."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    company: str | None = None
    position: str | None = None
    url: str | None = None
    connected_on: dt.date | None = None


class MessageRow(_Row):
    sender: str | None = Field(default=None, description="Full name of the sender")
    recipient: str | None = Field(default=None, description="Full name of the recipient")
    date: dt.date | None = None


class InvitationRow(_Row):
    sender: str | None = None
    recipient: str | None = None
    direction: str | None = Field(default=None, description="OUTGOING or INCOMING")
    sent_at: dt.date | None = None


class EndorsementRow(_Row):
    """The other party's name: endorser for received, endorsee for given."""

    first_name: str | None = None
    last_name: str | None = None
    endorsement_date: dt.date | None = None
    skill_name: str | None = None


class RecommendationRow(_Row):
    first_name: str | None = None
    last_name: str | None = None
    creation_date: dt.date | None = None


class ConnectionBatch(BaseModel):
    kind: Literal["connections"] = "connections"
    rows: list[ConnectionRow] = Field(default_factory=list)


class MessageBatch(BaseModel):
    kind: Literal["messages"] = "messages"
    rows: list[MessageRow] = Field(default_factory=list)


class InvitationBatch(BaseModel):
    kind: Literal["invitations"] = "invitations"
    rows: list[InvitationRow] = Field(default_factory=list)


class EndorsementBatch(BaseModel):
    kind: Literal["endorsements_received", "endorsements_given"]
    rows: list[EndorsementRow] = Field(default_factory=list)


class RecommendationBatch(BaseModel):
    kind: Literal["recommendations_received", "recommendations_given"]
    rows: list[RecommendationRow] = Field(default_factory=list)


InteractionBatch = (
    ConnectionBatch | MessageBatch | InvitationBatch | EndorsementBatch | RecommendationBatch
)

_BATCH_MODELS: dict[str, type[BaseModel]] = {
    "connections": ConnectionBatch,
    "messages": MessageBatch,
    "invitations": InvitationBatch,
    "endorsements_received": EndorsementBatch,
    "endorsements_given": EndorsementBatch,
    "recommendations_received": RecommendationBatch,
    "recommendations_given": RecommendationBatch,
}


def parse_batch(kind: str, rows: list[dict[str, Any]]) -> InteractionBatch:
    """
    Validate raw rows into a typed batch.

    Raises:
        InvalidInputError: If the kind is unknown or a row fails validation
    """
    model = _BATCH_MODELS.get(kind)
    if model is None:
        raise InvalidInputError(f"Unknown interaction batch kind: {kind!r}")
    try:
        return model(kind=kind, rows=rows)
    except ValidationError as exc:
        raise InvalidInputError(
            f"Invalid {kind} batch: {exc.error_count()} row error(s)", recoverable=False
        ) from exc
