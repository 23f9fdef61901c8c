# vitaltimeline/core/signals.py
"""
Static catalog of editable signals and export columns.

Nothing here is mutable: the registry is a lookup table keyed by the closed
`SignalKey` enumeration. Unknown names are rejected at lookup time with
`UnknownSignal`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .exceptions import InvalidSignalDefinition, UnknownSignal


class SignalKey(str, Enum):
    HR = "HR"
    SPO2 = "SpO2"
    RR = "RR"
    ETCO2 = "etCO2"
    NBP_SYS = "NBP (Sys)"
    NBP_DIA = "NBP (Dia)"
    NBP_MEAN = "NBP (Mean)"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, key: "SignalKey | str") -> "SignalKey":
        """Accept a SignalKey or its exact column name."""
        if isinstance(key, SignalKey):
            return key
        try:
            return cls(key)
        except ValueError as e:
            raise UnknownSignal(key) from e


@dataclass(frozen=True, slots=True)
class SignalDefinition:
    """
    Bounds and presentation hints for one signal.

    - min/max: hard bounds, every stored value is clamped into them
    - default: baseline value used when there are no control points
    - step: snap increment for value edits (optional)
    - soft_low/soft_high: "normal" band, display shading only (optional)
    """
    unit: str
    min: float
    max: float
    default: float
    step: float | None = None
    soft_low: float | None = None
    soft_high: float | None = None

    def __post_init__(self) -> None:
        if not (self.min <= self.default <= self.max):
            raise InvalidSignalDefinition(
                f"default {self.default} outside [{self.min}, {self.max}]"
            )
        if (self.soft_low is None) != (self.soft_high is None):
            raise InvalidSignalDefinition("soft_low and soft_high must be set together.")
        if self.soft_low is not None and not (
            self.min <= self.soft_low <= self.soft_high <= self.max  # type: ignore[operator]
        ):
            raise InvalidSignalDefinition(
                f"soft band [{self.soft_low}, {self.soft_high}] outside [{self.min}, {self.max}]"
            )
        if self.step is not None and self.step <= 0:
            raise InvalidSignalDefinition("step must be positive when given.")

    @property
    def has_soft_band(self) -> bool:
        return self.soft_low is not None

    def clamp(self, value: float) -> float:
        return float(min(self.max, max(self.min, value)))

    def snap(self, value: float) -> float:
        """Round to the nearest `step` (if any) and clamp."""
        if self.step is None:
            return self.clamp(value)
        return self.clamp(round(value / self.step) * self.step)

    def in_soft_band(self, value: float) -> bool:
        if not self.has_soft_band:
            return False
        return self.soft_low <= value <= self.soft_high  # type: ignore[operator]


SIGNALS: Mapping[SignalKey, SignalDefinition] = MappingProxyType({
    SignalKey.HR:       SignalDefinition("bpm",  0,  220, 70,  step=1, soft_low=60, soft_high=100),
    SignalKey.SPO2:     SignalDefinition("%",    50, 100, 98,  step=1, soft_low=95, soft_high=100),
    SignalKey.RR:       SignalDefinition("bpm",  0,  60,  14,  step=1, soft_low=12, soft_high=20),
    SignalKey.ETCO2:    SignalDefinition("mmHg", 0,  80,  35,  step=1, soft_low=35, soft_high=45),
    SignalKey.NBP_SYS:  SignalDefinition("mmHg", 50, 220, 120, step=1, soft_low=90, soft_high=140),
    SignalKey.NBP_DIA:  SignalDefinition("mmHg", 30, 140, 75,  step=1, soft_low=60, soft_high=90),
    SignalKey.NBP_MEAN: SignalDefinition("mmHg", 40, 180, 90,  step=1, soft_low=70, soft_high=105),
})


def definition(key: SignalKey | str) -> SignalDefinition:
    return SIGNALS[SignalKey.parse(key)]


def signal_key_for_name(name: str) -> SignalKey | None:
    """Case-insensitive exact match of a column header against the catalog."""
    needle = name.strip().casefold()
    for key in SignalKey:
        if key.value.casefold() == needle:
            return key
    return None


# ---- export column catalog ----
REQUIRED_COLUMNS: tuple[str, ...] = ("Time", "RelativeTimeMilliseconds", "Clock")

DEFAULT_ACTIVE: tuple[SignalKey, ...] = (
    SignalKey.HR,
    SignalKey.SPO2,
    SignalKey.RR,
    SignalKey.ETCO2,
)

UQ_HEADERS: tuple[str, ...] = (
    "Time",
    "RelativeTimeMilliseconds",
    "Clock",
    "HR",
    "ST-II",
    "Pulse",
    "SpO2",
    "Perf",
    "etCO2",
    "imCO2",
    "awRR",
    "NBP (Sys)",
    "NBP (Dia)",
    "NBP (Mean)",
    "NBP (Pulse)",
    "NBP (Time Remaining)",
    "ART (Sys)",
    "ART (Dia)",
    "ART (Mean)",
    "etDES",
    "inDES",
    "etISO",
    "inISO",
    "etSEV",
    "inSEV",
    "etN2O",
    "inN2O",
    "MAC",
    "etO2",
    "inO2",
    "Temp",
    "BIS",
    "SQI",
    "EMG",
    "Tidal Volume",
    "Minute Volume",
    "RR",
    "Set Tidal Volume",
    "Set RR",
    "Set I:E Ratio",
    "Set PEEP",
    "Set PAWmax",
    "Set PAWmin",
    "Set Mechanical Ventilation",
    "Tidal Volume Exp (Spiro)",
    "Tidal Volume In (Spiro)",
    "Minute Volume Exp (Spiro)",
    "Minute Volume In (Spiro)",
    "Lung Compliance (Spiro)",
    "Airway Resistance (Spiro)",
    "Max Inspiratory Pressure (Spiro)",
    "Num Patient Alarms",
    "Num Technical Alarms",
)


def default_columns(selected: Iterable[SignalKey | str] = DEFAULT_ACTIVE) -> list[str]:
    """Required time columns followed by the selected signal columns."""
    return [*REQUIRED_COLUMNS, *(SignalKey.parse(k).value for k in selected)]
