"""Data models for habitus."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

WEEKLY_MINUTES = 7 * 24 * 60


class HabitusError(ValueError):
    """Base class for rejected input."""


class InvalidActivity(HabitusError):
    pass


class InvalidEffect(HabitusError):
    pass


class InvalidPriorityLevel(HabitusError):
    pass


class InvalidTimeBudget(HabitusError):
    pass


class CapitalType(Enum):
    """A capital dimension an activity can improve."""

    PHYSICAL = "Physical"
    MENTAL = "Mental"
    KNOWLEDGE = "Knowledge"
    CULTURAL = "Cultural"
    LINGUISTIC = "Linguistic"
    SOCIAL = "Social"
    ECONOMIC = "Economic"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def resolve(cls, name: str) -> "CapitalType":
        """Look up a dimension by member name, ignoring case and surrounding space."""
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown capital dimension: {name!r}") from None


class PriorityLevel(Enum):
    """Importance tier for a capital dimension; the value is the weight."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def weight(self) -> int:
        return self.value

    @classmethod
    def from_weight(cls, weight: int) -> "PriorityLevel":
        # bool is an int subclass; True must not read as LOW
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidPriorityLevel(f"Priority weight must be an integer 1-3: {weight!r}")
        try:
            return cls(weight)
        except ValueError:
            raise InvalidPriorityLevel(f"Priority weight must be between 1 and 3: {weight}") from None


def _frozen_mapping(values: Mapping) -> Mapping:
    # Keep CapitalType declaration order regardless of input order
    return MappingProxyType({t: values[t] for t in CapitalType if t in values})


@dataclass(frozen=True)
class Priority:
    """Total mapping from every capital dimension to a priority level."""

    levels: Mapping[CapitalType, PriorityLevel]

    def __post_init__(self):
        missing = [t.name for t in CapitalType if t not in self.levels]
        if missing:
            raise ValueError(f"Priority is missing dimensions: {', '.join(missing)}")
        for capital_type, level in self.levels.items():
            if not isinstance(level, PriorityLevel):
                raise InvalidPriorityLevel(f"Not a priority level for {capital_type.name}: {level!r}")
        object.__setattr__(self, "levels", _frozen_mapping(self.levels))

    @classmethod
    def of(cls, levels: Mapping[CapitalType, PriorityLevel]) -> "Priority":
        """Build a priority, defaulting omitted dimensions to LOW."""
        return cls({t: levels.get(t, PriorityLevel.LOW) for t in CapitalType})

    @classmethod
    def default(cls) -> "Priority":
        return cls.of({})

    def level(self, capital_type: CapitalType) -> PriorityLevel:
        return self.levels[capital_type]

    def weight(self, capital_type: CapitalType) -> int:
        return self.levels[capital_type].weight

    def __eq__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return dict(self.levels) == dict(other.levels)

    def __hash__(self):
        return hash(tuple(self.levels.items()))


@dataclass(frozen=True)
class ActivityEffects:
    """Non-negative effect magnitude of an activity on every capital dimension."""

    magnitudes: Mapping[CapitalType, int]

    def __post_init__(self):
        for capital_type in CapitalType:
            magnitude = self.magnitudes.get(capital_type)
            if magnitude is None:
                raise InvalidEffect(f"Missing effect for {capital_type.name}")
            if isinstance(magnitude, bool) or not isinstance(magnitude, int):
                raise InvalidEffect(f"Effect for {capital_type.name} must be an integer: {magnitude!r}")
            if magnitude < 0:
                raise InvalidEffect(f"Effect for {capital_type.name} cannot be negative: {magnitude}")
        object.__setattr__(self, "magnitudes", _frozen_mapping(self.magnitudes))

    @classmethod
    def of(cls, magnitudes: Mapping[CapitalType, int]) -> "ActivityEffects":
        """Build effects from a partial mapping; omitted dimensions are 0."""
        return cls({t: magnitudes.get(t, 0) for t in CapitalType})

    @classmethod
    def empty(cls) -> "ActivityEffects":
        return cls.of({})

    def effect(self, capital_type: CapitalType) -> int:
        return self.magnitudes[capital_type]

    def active_effects(self) -> dict[CapitalType, int]:
        """Dimensions with a positive magnitude."""
        return {t: m for t, m in self.magnitudes.items() if m > 0}

    def weighted_effects(self, priority: Priority) -> dict[CapitalType, int]:
        """Active effects multiplied by the priority weight of their dimension."""
        return {t: m * priority.weight(t) for t, m in self.magnitudes.items() if m > 0}

    def weighted_value(self, priority: Priority) -> int:
        """
        Value of these effects under a priority.

        value = sum over dimensions of effect * priority weight
        """
        return sum(m * priority.weight(t) for t, m in self.magnitudes.items())

    def __eq__(self, other):
        if not isinstance(other, ActivityEffects):
            return NotImplemented
        return dict(self.magnitudes) == dict(other.magnitudes)

    def __hash__(self):
        return hash(tuple(self.magnitudes.items()))


@dataclass(frozen=True)
class Activity:
    """A candidate activity."""

    id: int | str | None
    name: str
    duration_minutes: int
    effects: ActivityEffects = field(default_factory=ActivityEffects.empty)
    cost: int = 0  # reserved, not used by the optimizer
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidActivity("Activity name is required")
        if isinstance(self.duration_minutes, bool) or not isinstance(self.duration_minutes, int):
            raise InvalidActivity(f"Duration must be an integer number of minutes: {self.duration_minutes!r}")
        if self.duration_minutes <= 0:
            raise InvalidActivity(f"Duration must be positive: {self.duration_minutes}")
        if isinstance(self.cost, bool) or not isinstance(self.cost, int):
            raise InvalidActivity(f"Cost must be an integer: {self.cost!r}")
        if self.cost < 0:
            raise InvalidActivity(f"Cost cannot be negative: {self.cost}")
        if not isinstance(self.effects, ActivityEffects):
            raise InvalidActivity(f"Effects of {self.name!r} must be ActivityEffects")

    def value(self, priority: Priority) -> int:
        return self.effects.weighted_value(priority)

    def fits_within(self, available_minutes: int) -> bool:
        return self.duration_minutes <= available_minutes

    def effect_on(self, capital_type: CapitalType) -> int:
        return self.effects.effect(capital_type)

    def active_effects(self) -> dict[CapitalType, int]:
        return self.effects.active_effects()

    def weighted_effects(self, priority: Priority) -> dict[CapitalType, int]:
        return self.effects.weighted_effects(priority)


@dataclass(frozen=True)
class TimeBudget:
    """Minutes available for one recommendation, at most one week."""

    minutes: int

    def __post_init__(self):
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise InvalidTimeBudget(f"Time budget must be an integer number of minutes: {self.minutes!r}")
        if self.minutes <= 0:
            raise InvalidTimeBudget(f"Time budget must be positive: {self.minutes}")
        if self.minutes > WEEKLY_MINUTES:
            raise InvalidTimeBudget(
                f"Time budget cannot exceed one week ({WEEKLY_MINUTES} minutes): {self.minutes}"
            )

    def can_accommodate(self, required_minutes: int) -> bool:
        return self.minutes >= required_minutes

    def subtract(self, minutes: int) -> "TimeBudget":
        return TimeBudget(self.minutes - minutes)


@dataclass(frozen=True)
class SelectedActivity:
    """An activity chosen by the optimizer with its weighted value."""

    activity: Activity
    value: int


@dataclass(frozen=True)
class RecommendationResult:
    """Result of the optimization."""

    selected_activities: tuple[SelectedActivity, ...]
    total_value: int
    total_minutes: int
    remaining_minutes: int

    @classmethod
    def empty(cls, available_minutes: int) -> "RecommendationResult":
        return cls(
            selected_activities=(),
            total_value=0,
            total_minutes=0,
            remaining_minutes=available_minutes,
        )

    @property
    def activity_count(self) -> int:
        return len(self.selected_activities)

    @property
    def total_capital_gains(self) -> dict[CapitalType, int]:
        """Raw (unweighted) effects summed per dimension; zero totals are left out."""
        gains: dict[CapitalType, int] = {}
        for selected in self.selected_activities:
            for capital_type, effect in selected.activity.active_effects().items():
                gains[capital_type] = gains.get(capital_type, 0) + effect
        return {t: gains[t] for t in CapitalType if gains.get(t)}

    @property
    def time_utilization_rate(self) -> float:
        """Percentage of the budget consumed."""
        total_available = self.total_minutes + self.remaining_minutes
        if total_available <= 0:
            return 0.0
        return self.total_minutes / total_available * 100
