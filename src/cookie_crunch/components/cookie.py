from dataclasses import dataclass
from typing import Any

from cookie_crunch.components.cookie_type import CookieType


@dataclass(slots=True, eq=False)
class Cookie:
    """A cookie occupying one board cell.

    ``entity`` is the esper entity id backing this cookie and is its identity,
    so it has no default. Equality and hashing ignore ``column``/``row``,
    which change as the cookie moves, so cookies stay valid members of sets
    while they fall or swap.
    ``sprite`` belongs to the renderer; the engine never reads it.
    """
    column: int
    row: int
    cookie_type: CookieType
    entity: int
    sprite: Any = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cookie):
            return NotImplemented
        return self.entity == other.entity

    def __hash__(self) -> int:
        return hash(self.entity)
