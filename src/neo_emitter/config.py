"""Configuration models for NEO emitters."""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class EmitterSettings(BaseModel):
    """Settings that control the ambient behaviour of an emitter."""

    log_emissions: bool = Field(
        default=False,
        description="If True every emit call produces a structured log record.",
    )
    collect_metrics: bool = Field(
        default=True,
        description="Whether emissions and deliveries are counted in the emitter's metrics collector.",
    )
    logger_name: str = Field(
        default="emitter",
        min_length=1,
        description="Child logger name under the neo_emitter namespace",
    )


def build_settings_from_dict(raw: Mapping[str, Any]) -> EmitterSettings:
    """Utility helper to build :class:`EmitterSettings` from a plain dictionary."""

    try:
        return EmitterSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid emitter settings: {exc}") from exc


__all__ = [
    "EmitterSettings",
    "build_settings_from_dict",
]
