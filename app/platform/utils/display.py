"""Status and stat presentation. Pure functions, no state."""
from typing import Any, List, Tuple

from pydantic import BaseModel


class Badge(BaseModel):
    label: str
    text_color: str
    background_color: str


class StatCard(BaseModel):
    name: str
    value: Any
    color: str
    background_color: str


_POSITIVE = ("text-green-800", "bg-green-100")
_NEGATIVE = ("text-red-800", "bg-red-100")
_WAITING = ("text-yellow-800", "bg-yellow-100")

BADGE_COLORS = {
    "accepted": _POSITIVE,
    "approved": _POSITIVE,
    "rejected": _NEGATIVE,
}

CARD_COLORS = [
    ("text-blue-600", "bg-blue-100"),
    ("text-green-600", "bg-green-100"),
    ("text-yellow-600", "bg-yellow-100"),
    ("text-indigo-600", "bg-indigo-100"),
]


def status_badge(status: str) -> Badge:
    """Anything that is not a decided status renders as pending/waiting."""
    key = (status or "pending").lower()
    text_color, background_color = BADGE_COLORS.get(key, _WAITING)
    return Badge(label=key.capitalize(), text_color=text_color, background_color=background_color)


def stat_cards(stats: List[Tuple[str, Any]]) -> List[StatCard]:
    cards = []
    for index, (name, value) in enumerate(stats):
        color, background = CARD_COLORS[index % len(CARD_COLORS)]
        cards.append(StatCard(name=name, value=value, color=color, background_color=background))
    return cards
