"""Base model for questions, answers, votes, users and notifications."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen entity; changes go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
