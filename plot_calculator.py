import logging
import math
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

# Constants
SQFT_PER_MARLA = 272
FEET_PER_YARD = 3
SIDES = ("back", "left", "right", "front")

_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

Notifier = Callable[[str, str], None]


class Unit(str, Enum):
    FEET = "feet"
    YARDS = "yards"


class PlotCalculationError(ValueError):
    """Raised when an action cannot run with the current dimensions."""


class IncompleteInputError(PlotCalculationError):
    def __init__(self, message: str = "Please enter valid values for all sides"):
        super().__init__(message)


class AmbiguousMissingSideError(PlotCalculationError):
    def __init__(self, message: str = "Please provide exactly three sides"):
        super().__init__(message)


def _check_side(side: str) -> str:
    if side not in SIDES:
        raise ValueError(f"Unknown side: {side!r}. Expected one of {', '.join(SIDES)}")
    return side


@dataclass(frozen=True)
class PlotDimensions:
    """Side lengths of a plot in the selected unit. 0 means not entered."""

    back: float = 0.0
    left: float = 0.0
    right: float = 0.0
    front: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.back, self.left, self.right, self.front)

    def get(self, side: str) -> float:
        return self.as_tuple()[SIDES.index(_check_side(side))]

    def with_side(self, side: str, value: float) -> "PlotDimensions":
        return replace(self, **{_check_side(side): value})

    def scaled(self, factor: float) -> "PlotDimensions":
        return PlotDimensions(*(value * factor for value in self.as_tuple()))

    def known_sides(self) -> Tuple[str, ...]:
        return tuple(side for side, value in zip(SIDES, self.as_tuple()) if value > 0)

    def zero_sides(self) -> Tuple[str, ...]:
        return tuple(side for side, value in zip(SIDES, self.as_tuple()) if value == 0)


@dataclass(frozen=True)
class AreaResult:
    area_sqft: float
    marla: float

    def __str__(self) -> str:
        return f"{self.area_sqft:.2f} sq ft ({self.marla:.2f} marla)"


def parse_side(raw) -> float:
    """Parse the leading number of a text field, falling back to 0.0.

    "12.5" -> 12.5, "12ft" -> 12.0, "abc" -> 0.0, "" -> 0.0
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _NUMBER_PREFIX.match(str(raw))
        if not match:
            return 0.0
        value = float(match.group(1))
    if not math.isfinite(value) or value == 0:
        return 0.0
    return value


def format_side(value: float) -> str:
    """Field text for a stored side length. Unset sides show as empty."""
    return repr(value) if value else ""


def to_feet(dimensions: PlotDimensions, unit: Unit) -> PlotDimensions:
    """Convert side lengths to feet (linear, 1 yard = 3 feet)."""
    if Unit(unit) is Unit.YARDS:
        return dimensions.scaled(FEET_PER_YARD)
    return dimensions


def compute_area(dimensions: PlotDimensions, unit: Unit) -> AreaResult:
    """Trapezoid estimate: mean of back/front times mean of left/right."""
    if any(value <= 0 for value in dimensions.as_tuple()):
        raise IncompleteInputError()

    feet = to_feet(dimensions, unit)
    avg_width = (feet.back + feet.front) / 2
    avg_height = (feet.left + feet.right) / 2
    area = avg_width * avg_height
    return AreaResult(area_sqft=area, marla=area / SQFT_PER_MARLA)


def estimate_missing_side(dimensions: PlotDimensions) -> Tuple[str, float]:
    """Return the first unset side and the mean of the three known sides.

    The mean is taken on the raw values, whatever the unit.
    """
    zero = dimensions.zero_sides()
    known = dimensions.known_sides()
    if not zero or len(known) != 3:
        raise AmbiguousMissingSideError()

    missing = zero[0]
    estimate = sum(dimensions.get(side) for side in known) / len(known)
    return missing, estimate


class PlotCalculator:
    """Form state for one plot: four sides, a unit and the last result.

    Actions never raise on bad input. They report through ``notify``
    (``"success"`` or ``"error"``) and return whether they succeeded.
    """

    def __init__(
        self,
        notify: Optional[Notifier] = None,
        dimensions: Optional[PlotDimensions] = None,
        unit: Unit = Unit.FEET,
        result: Optional[str] = None,
    ):
        self._notify = notify
        self.dimensions = dimensions or PlotDimensions()
        self.unit = Unit(unit)
        self.result = result

    def notify(self, message: str, category: str) -> None:
        if category == "error":
            logger.warning(message)
        else:
            logger.info(message)
        if self._notify is not None:
            self._notify(message, category)

    def set_side(self, side: str, raw) -> None:
        self.dimensions = self.dimensions.with_side(side, parse_side(raw))

    def set_unit(self, unit) -> None:
        self.unit = Unit(unit)

    def calculate_area(self) -> bool:
        try:
            area = compute_area(self.dimensions, self.unit)
        except PlotCalculationError as e:
            self.notify(str(e), "error")
            return False

        self.result = str(area)
        self.notify("Area calculated successfully!", "success")
        return True

    def calculate_missing_side(self) -> bool:
        try:
            side, estimate = estimate_missing_side(self.dimensions)
        except PlotCalculationError as e:
            self.notify(str(e), "error")
            return False

        self.dimensions = self.dimensions.with_side(side, estimate)
        self.notify(f"Estimated {side} side: {estimate:.2f} {self.unit.value}", "success")
        return True
