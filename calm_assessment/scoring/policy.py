"""Classification policy constants.

The thresholds that turn CALM scores into labels are product decisions,
not properties of the questionnaire. They live here, versioned, so that
the policy can be tuned without touching the accumulation logic.

Authoritative policy (calm-policy-1.0):
- Secondary loop is promoted at >= 70% of the primary loop score.
- Trigger origin compares internal (PS + CL) against external (AC + CO);
  a relative difference of 10% or less is "Mixed".
- A reinforcement mechanism dominates when it is at least 1.3x the
  lowest-ranked mechanism.
- Load imbalance >= 0.30 is Overloaded, >= 0.10 Strained. With zero
  recovery capacity the imbalance is pinned to 99.0.
- Stability is a heuristic over recovery deficit and answer diversity,
  not a validated clinical signal.
"""

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Optional

DEFAULT_POLICY_VERSION = "calm-policy-1.0"


@dataclass(frozen=True)
class ScoringPolicy:
    """Tunable thresholds used by the CALM classifiers."""

    version: str = DEFAULT_POLICY_VERSION

    # Loop classifier
    secondary_loop_ratio: float = 0.70

    # Trigger origin classifier
    trigger_mixed_band: float = 0.10

    # Reinforcement classifier
    reinforcement_margin: float = 1.3

    # Load vs capacity classifier
    load_overloaded_ratio: float = 0.30
    load_strained_ratio: float = 0.10
    imbalance_sentinel: float = 99.0

    # Stability classifier
    stability_high_deficit: int = 8
    stability_low_deficit: int = 4
    stability_low_diversity: float = 0.6

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.name == "version":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{f.name} must be a number, got {value!r}")

        if not 0 < self.secondary_loop_ratio <= 1:
            raise ValueError(
                f"secondary_loop_ratio must be in (0, 1], got {self.secondary_loop_ratio}"
            )
        if not 0 <= self.trigger_mixed_band < 1:
            raise ValueError(
                f"trigger_mixed_band must be in [0, 1), got {self.trigger_mixed_band}"
            )
        if self.reinforcement_margin < 1:
            raise ValueError(
                f"reinforcement_margin must be >= 1, got {self.reinforcement_margin}"
            )
        if self.load_strained_ratio > self.load_overloaded_ratio:
            raise ValueError("load_strained_ratio must not exceed load_overloaded_ratio")
        if not math.isfinite(self.imbalance_sentinel):
            raise ValueError("imbalance_sentinel must be a finite number")
        if self.imbalance_sentinel < self.load_overloaded_ratio:
            raise ValueError("imbalance_sentinel must fall in the Overloaded band")
        if self.stability_low_deficit > self.stability_high_deficit:
            raise ValueError("stability_low_deficit must not exceed stability_high_deficit")
        if not 0 <= self.stability_low_diversity <= 1:
            raise ValueError(
                f"stability_low_diversity must be in [0, 1], got {self.stability_low_diversity}"
            )

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "ScoringPolicy":
        """Build a policy from a mapping, ignoring unknown keys.

        Raises:
            ValueError: If a value is not a number or is out of range
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in (data or {}).items() if k in known}
        if "version" in values:
            values["version"] = str(values["version"])
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "ScoringPolicy":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to dictionary form."""
        return asdict(self)
