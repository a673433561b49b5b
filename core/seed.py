from __future__ import annotations
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

def base36_to_int(s: str) -> int:
    s = s.strip().lower()
    if not s or any(ch not in ALPHABET for ch in s):
        raise ValueError("Seed inválida (solo base36).")
    val = 0
    for ch in s:
        val = val * 36 + ALPHABET.index(ch)
    return val

def int_to_base36(n: int) -> str:
    if n < 0:
        raise ValueError("n debe ser no negativo")
    if n == 0:
        return "0"
    out = []
    while n > 0:
        n, r = divmod(n, 36)
        out.append(ALPHABET[r])
    return "".join(reversed(out))

class RNG:
    """Fuente aleatoria inyectable: seed base36, entero o None (entropía del sistema).

    Tanto la subdivisión como el selector de objetivo reciben una instancia,
    así una misma seed reproduce exactamente el mismo ejercicio.
    """
    def __init__(self, seed: Optional[str | int] = None):
        if seed is None:
            seed_int = random.SystemRandom().randint(1, 36**8 - 1)
        elif isinstance(seed, int):
            if seed < 0:
                raise ValueError("La seed entera debe ser no negativa.")
            seed_int = seed
        else:
            seed_int = base36_to_int(seed)
        self._seed_int = seed_int
        self._rand = random.Random(seed_int)

    @property
    def seed_int(self) -> int:
        return self._seed_int

    @property
    def seed_str(self) -> str:
        return int_to_base36(self._seed_int)

    def random(self) -> float:
        return self._rand.random()

    def randrange(self, n: int) -> int:
        """Entero uniforme en [0, n)."""
        return self._rand.randrange(n)

    def randint(self, a: int, b: int) -> int:
        return self._rand.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rand.choice(seq)

    def chance(self, p: float) -> bool:
        # True con probabilidad p
        return self._rand.random() < p
