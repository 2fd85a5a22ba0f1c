from dataclasses import dataclass


@dataclass(frozen=True)
class NearestAction:
    app_id: int
    app_name: str
    action_id: int
    action_name: str
    action_description: str
    distance: float


@dataclass(frozen=True)
class SeedReport:
    apps: int
    actions: int
