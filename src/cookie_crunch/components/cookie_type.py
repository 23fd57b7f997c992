from __future__ import annotations

import random
from enum import Enum
from typing import List


class CookieType(Enum):
    """Kinds of cookie. UNKNOWN is a sentinel and never placed on the board."""
    UNKNOWN = 0
    CROISSANT = 1
    CUPCAKE = 2
    DANISH = 3
    DONUT = 4
    MACAROON = 5
    SUGAR_COOKIE = 6

    @property
    def sprite_name(self) -> str:
        return _SPRITE_NAMES[self]

    @property
    def highlighted_sprite_name(self) -> str:
        return f"{self.sprite_name}-Highlighted"

    @classmethod
    def spawnable(cls) -> List["CookieType"]:
        return [cookie_type for cookie_type in cls if cookie_type is not cls.UNKNOWN]

    @classmethod
    def random(cls, rng: random.Random | None = None) -> "CookieType":
        return (rng or random).choice(cls.spawnable())


_SPRITE_NAMES = {
    CookieType.UNKNOWN: "",
    CookieType.CROISSANT: "Croissant",
    CookieType.CUPCAKE: "Cupcake",
    CookieType.DANISH: "Danish",
    CookieType.DONUT: "Donut",
    CookieType.MACAROON: "Macaroon",
    CookieType.SUGAR_COOKIE: "SugarCookie",
}
