"""Correlation engine configuration models."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# "overwrite": the latest fvg/absorption observation replaces the stored one.
# "latch": the first observation is kept until the next sweep resets it.
UpdatePolicy = Literal["overwrite", "latch"]


class CorrelatorConfig(BaseModel):
    """Parameters shared by every correlator in a store."""

    model_config = ConfigDict(frozen=True)

    # Maximum trade signals per sweep session
    max_emissions_per_session: int = Field(default=3, ge=1)

    # How long before the sweep a fair-value gap stays usable
    fvg_window: timedelta = timedelta(hours=1)

    update_policy: UpdatePolicy = "overwrite"
