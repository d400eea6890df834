"""Activity catalog storage for habitus."""

from typing import Iterable, Protocol

from habitus.models import Activity


class ActivityRepository(Protocol):
    """Source of candidate activities."""

    def find_all(self) -> list[Activity]: ...

    def find_by_id(self, activity_id) -> Activity | None: ...

    def save(self, activity: Activity) -> Activity: ...

    def delete(self, activity_id) -> None: ...


class InMemoryActivityRepository:
    """Activities kept in a dict, in insertion order."""

    def __init__(self, activities: Iterable[Activity] = ()):
        self._activities: dict = {}
        for activity in activities:
            self.save(activity)

    def find_all(self) -> list[Activity]:
        """Return a snapshot of all known activities."""
        return list(self._activities.values())

    def find_by_id(self, activity_id) -> Activity | None:
        return self._activities.get(activity_id)

    def save(self, activity: Activity) -> Activity:
        """Insert or replace an activity. Replacing keeps its original position."""
        if activity.id is None:
            raise ValueError(f"Activity {activity.name!r} has no id")
        self._activities[activity.id] = activity
        return activity

    def delete(self, activity_id) -> None:
        try:
            del self._activities[activity_id]
        except KeyError:
            raise KeyError(f"No activity with id {activity_id!r}") from None

    def __len__(self) -> int:
        return len(self._activities)
