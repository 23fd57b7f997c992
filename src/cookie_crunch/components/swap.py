from dataclasses import dataclass

from cookie_crunch.components.cookie import Cookie


@dataclass(frozen=True, slots=True, eq=False)
class Swap:
    """Unordered pair of adjacent cookies; Swap(a, b) == Swap(b, a)."""
    cookie_a: Cookie
    cookie_b: Cookie

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Swap):
            return NotImplemented
        return {self.cookie_a, self.cookie_b} == {other.cookie_a, other.cookie_b}

    def __hash__(self) -> int:
        return hash(frozenset((self.cookie_a, self.cookie_b)))
