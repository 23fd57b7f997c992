from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List

from cookie_crunch.components.cookie import Cookie


class ChainType(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


@dataclass(slots=True, eq=False)
class Chain:
    """A run of same-typed cookies along one axis, in detection order.

    Chains compare by identity: a cookie at an L/T intersection belongs to two
    distinct chains.
    """
    chain_type: ChainType
    cookies: List[Cookie] = field(default_factory=list)
    score: int = 0

    def add_cookie(self, cookie: Cookie) -> None:
        self.cookies.append(cookie)

    @property
    def first_cookie(self) -> Cookie:
        return self.cookies[0]

    @property
    def last_cookie(self) -> Cookie:
        return self.cookies[-1]

    @property
    def length(self) -> int:
        return len(self.cookies)

    def __len__(self) -> int:
        return len(self.cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(self.cookies)
