from __future__ import annotations
from dataclasses import dataclass
import math

@dataclass(frozen=True)
class Fraction:
    numerator: int
    denominator: int

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def as_dict(self) -> dict:
        return {"numerator": self.numerator, "denominator": self.denominator}

def simplify(numerator: int, denominator: int) -> Fraction:
    """Reduce numerator/denominator por MCD; el signo queda en el numerador.

    simplify(6, 8)  -> 3/4
    simplify(-6, 8) -> -3/4
    simplify(0, 5)  -> 0/1
    """
    if denominator == 0:
        raise ValueError("El denominador no puede ser 0.")
    g = math.gcd(numerator, denominator)
    n, d = numerator // g, denominator // g
    if d < 0:
        n, d = -n, -d
    return Fraction(n, d)
