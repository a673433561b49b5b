from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple
import logging

import numpy as np

from .fraction import Fraction, simplify
from .seed import RNG

logger = logging.getLogger(__name__)

class TargetSelectionError(ValueError):
    """Configuración sin objetivo posible (total de unidades < 2)."""

def proper_divisors(n: int) -> List[int]:
    """Divisores d de n con 1 <= d < n, en orden creciente."""
    small, large = [], []
    d = 1
    while d * d <= n:
        if n % d == 0:
            small.append(d)
            if d != n // d:
                large.append(n // d)
        d += 1
    return [d for d in small + large[::-1] if d < n]

def pick_reachable_target(total_units: int, rng: RNG) -> Tuple[int, Fraction]:
    """
    Elige un objetivo múltiplo de un divisor propio de total_units:
    divisor d al azar, n uniforme en [0, (total-1)//d) llevado a >= 1,
    objetivo = n*d. Devuelve (target_units, fracción reducida).
    """
    if total_units < 2:
        raise TargetSelectionError(f"Se necesitan al menos 2 unidades para elegir un objetivo (total={total_units}).")
    d = rng.choice(proper_divisors(total_units))
    k_max = (total_units - 1) // d
    n = max(1, rng.randrange(k_max))
    target_units = n * d
    return target_units, simplify(target_units, total_units)

def reachable_sums(units: Iterable[int]) -> np.ndarray:
    """Tabla booleana: reach[s] es True si algún subconjunto de celdas suma s."""
    units = list(units)
    reach = np.zeros(sum(units) + 1, dtype=bool)
    reach[0] = True
    for u in units:
        reach[u:] = reach[u:] | reach[:-u]
    return reach

def pick_target_for_cells(cell_units: Sequence[int], rng: RNG, max_attempts: int = 32) -> Tuple[int, Fraction]:
    """Como pick_reachable_target, pero exige que el objetivo sea alcanzable
    sumando celdas reales (importa con subdivisión parcial)."""
    total = int(sum(cell_units))
    if total < 2 or len(cell_units) < 2:
        raise TargetSelectionError(f"Se necesitan al menos 2 celdas y 2 unidades (celdas={len(cell_units)}, total={total}).")
    reach = reachable_sums(cell_units)
    for attempt in range(max_attempts):
        target_units, frac = pick_reachable_target(total, rng)
        if reach[target_units]:
            if attempt:
                logger.debug(f"Objetivo {target_units}/{total} aceptado tras {attempt + 1} intentos")
            return target_units, frac
    candidates = [s for s in range(1, total) if reach[s]]
    target_units = rng.choice(candidates)
    logger.info(f"Sin objetivo alcanzable en {max_attempts} intentos; se elige {target_units}/{total} entre sumas posibles")
    return target_units, simplify(target_units, total)

def is_correct(selected_units_sum: int, target_units: int) -> bool:
    return selected_units_sum == target_units
