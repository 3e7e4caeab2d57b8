"""Road classification policy: which highway tags are drivable and their default speeds."""

from __future__ import annotations

from dataclasses import dataclass, field

DRIVABLE_HIGHWAYS = frozenset(
    {
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "living_street",
    }
)

# Deliberately narrower than DRIVABLE_HIGHWAYS; unclassified and living_street use FALLBACK_SPEED.
DEFAULT_SPEEDS = {
    "motorway": "90",
    "trunk": "70",
    "primary": "60",
    "secondary": "50",
    "tertiary": "50",
    "residential": "30",
    "service": "20",
}
FALLBACK_SPEED = "50"


@dataclass(frozen=True)
class ClassificationPolicy:
    drivable_highways: frozenset[str] = DRIVABLE_HIGHWAYS
    default_speeds: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SPEEDS))
    fallback_speed: str = FALLBACK_SPEED

    def __hash__(self) -> int:
        return hash((self.drivable_highways, tuple(sorted(self.default_speeds.items())), self.fallback_speed))

    def is_drivable(self, tag: str | None) -> bool:
        if not tag:
            return False
        return tag in self.drivable_highways

    def default_speed(self, tag: str | None) -> str:
        return self.default_speeds.get(tag or "", self.fallback_speed)


DEFAULT_POLICY = ClassificationPolicy()


def is_drivable(tag: str | None) -> bool:
    return DEFAULT_POLICY.is_drivable(tag)


def default_speed(tag: str | None) -> str:
    return DEFAULT_POLICY.default_speed(tag)
