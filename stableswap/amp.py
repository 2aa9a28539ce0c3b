"""Amplification coefficient ramping.

The amplification coefficient moves linearly between two values over a time
window. Pool state stores the schedule; the effective value has to be
recomputed for every quote because it depends on the current time.
"""

from __future__ import annotations

from dataclasses import dataclass

from stableswap.constants import MAX_AMP, MIN_AMP, RAMP_MIN_DURATION
from stableswap.errors import InvalidAmp, RampConstraint
from stableswap.safe_int import S, check_i64


def effective_amp(
    amp_start: int,
    target_amp: int,
    ramp_start: int,
    ramp_end: int,
    now: int,
) -> int:
    """Calculate the amplification coefficient in effect at time `now`.

    Regions of the time axis:
        - now >= ramp_end, or an empty window: target_amp
        - now <= ramp_start: amp_start
        - otherwise: amp_start moved towards target_amp by
          |target_amp - amp_start| * elapsed / duration (truncating)

    Args:
        amp_start: Amplification at the start of the ramp
        target_amp: Amplification at the end of the ramp
        ramp_start: Ramp start timestamp (seconds, i64)
        ramp_end: Ramp end timestamp (seconds, i64)
        now: Current timestamp (seconds, i64)

    Returns:
        The effective amplification coefficient
    """
    start, target = S(amp_start), S(target_amp)
    check_i64(ramp_start, "ramp_start")
    check_i64(ramp_end, "ramp_end")
    check_i64(now, "now")

    if now >= ramp_end or ramp_end == ramp_start:
        return target.value
    if now <= ramp_start:
        return start.value

    elapsed = S(now - ramp_start)
    duration = S(ramp_end - ramp_start)

    if target > start:
        return (start + ((target - start).widen() * elapsed) // duration).narrow().value
    return (start - ((start - target).widen() * elapsed) // duration).narrow().value


@dataclass(frozen=True)
class RampSchedule:
    """A linear amplification ramp.

    Attributes:
        amp_start: Amplification when the ramp begins
        target_amp: Amplification when the ramp ends
        ramp_start: Ramp start timestamp (seconds)
        ramp_end: Ramp end timestamp (seconds)
    """

    amp_start: int
    target_amp: int
    ramp_start: int
    ramp_end: int

    @classmethod
    def constant(cls, amp: int) -> RampSchedule:
        """Schedule for a pool that is not ramping."""
        return cls(amp_start=amp, target_amp=amp, ramp_start=0, ramp_end=0)

    @property
    def is_ramping(self) -> bool:
        return self.ramp_end != self.ramp_start and self.amp_start != self.target_amp

    def amp_at(self, now: int) -> int:
        """Effective amplification at `now`."""
        return effective_amp(self.amp_start, self.target_amp, self.ramp_start, self.ramp_end, now)


def validate_amp(amp: int) -> int:
    """Check that amp lies in [MIN_AMP, MAX_AMP].

    Raises:
        InvalidAmp: If amp is out of range
    """
    if amp < MIN_AMP or amp > MAX_AMP:
        raise InvalidAmp(f"Amplification must be in [{MIN_AMP}, {MAX_AMP}], got {amp}")
    return amp


def validate_ramp(amp_start: int, target_amp: int, ramp_start: int, ramp_end: int) -> RampSchedule:
    """Check a ramp request against the pool program's ramp constraints.

    Args:
        amp_start: Amplification in effect when the ramp begins
        target_amp: Requested final amplification
        ramp_start: Ramp start timestamp (seconds)
        ramp_end: Ramp end timestamp (seconds)

    Returns:
        The validated RampSchedule

    Raises:
        InvalidAmp: If either amplification is out of range
        RampConstraint: If the ramp is shorter than RAMP_MIN_DURATION
    """
    validate_amp(amp_start)
    validate_amp(target_amp)
    check_i64(ramp_start, "ramp_start")
    check_i64(ramp_end, "ramp_end")
    if ramp_end - ramp_start < RAMP_MIN_DURATION:
        raise RampConstraint(
            f"Ramp must last at least {RAMP_MIN_DURATION}s, got {ramp_end - ramp_start}s"
        )
    return RampSchedule(amp_start, target_amp, ramp_start, ramp_end)
