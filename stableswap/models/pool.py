"""Pool snapshot model.

A PoolSnapshot holds the numeric fields of a 2-token pool account at one
moment: reserves, LP supply, the amplification ramp and the fee. Decoding
the account itself happens elsewhere; the quoter only needs these numbers.
"""

from enum import Enum

from pydantic import BaseModel, Field

from stableswap.amp import RampSchedule
from stableswap.constants import DEFAULT_FEE_BPS, MAX_AMP, MIN_AMP
from stableswap.models.types import U64, Bps, Timestamp


class SwapDirection(str, Enum):
    """Which pool token is sold."""

    T0_T1 = "t0_t1"  # sell token 0, buy token 1
    T1_T0 = "t1_t0"  # sell token 1, buy token 0


class PoolSnapshot(BaseModel):
    """Numeric state of a 2-token StableSwap pool.

    `amp` is the amplification at the start of the current ramp and
    `target_amp` the value it ramps to. A pool that is not ramping has
    ramp_start == ramp_end, in which case target_amp is in effect.
    """

    balance0: U64 = Field(description="Reserve of token 0 in base units.")
    balance1: U64 = Field(description="Reserve of token 1 in base units.")
    lp_supply: U64 = Field(default=0, alias="lpSupply", description="Total LP token supply.")
    amp: int = Field(ge=MIN_AMP, le=MAX_AMP, description="Amplification at ramp start.")
    target_amp: int | None = Field(
        default=None,
        ge=MIN_AMP,
        le=MAX_AMP,
        alias="targetAmp",
        description="Amplification at ramp end. Defaults to amp (no ramp).",
    )
    ramp_start: Timestamp = Field(default=0, alias="rampStart")
    ramp_end: Timestamp = Field(default=0, alias="rampEnd")
    fee_bps: Bps = Field(default=DEFAULT_FEE_BPS, alias="feeBps")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def ramp(self) -> RampSchedule:
        """The amplification ramp stored in the pool."""
        target = self.amp if self.target_amp is None else self.target_amp
        return RampSchedule(
            amp_start=self.amp,
            target_amp=target,
            ramp_start=self.ramp_start,
            ramp_end=self.ramp_end,
        )

    def amp_at(self, now: int) -> int:
        """Effective amplification at `now` (recomputed on every call)."""
        return self.ramp.amp_at(now)

    def reserves(self, direction: SwapDirection) -> tuple[int, int]:
        """Return (balance_in, balance_out) for a swap direction."""
        if direction == SwapDirection.T0_T1:
            return self.balance0, self.balance1
        return self.balance1, self.balance0
