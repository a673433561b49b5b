from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple
import logging
import math

from .seed import RNG
from .shapes import Point, SHAPE_KINDS, midpoint, centroid, arc_point, base_outline, base_circle

logger = logging.getLogger(__name__)

@dataclass
class SubdivisionParams:
    continue_probability: float = 0.6   # prob. de seguir subdividiendo una rama (modo parcial)
    circle_sectors: int = 6             # sectores iniciales del círculo
    arc_segments: int = 10              # segmentos rectos por arco de sector

@dataclass(frozen=True)
class Cell:
    points: Tuple[Point, ...]
    units: int

# ───────── Factores de ramificación ─────────

def branching_factor(kind: str) -> int:
    if kind not in SHAPE_KINDS:
        raise ValueError(f"Figura desconocida: '{kind}'.")
    return 2 if kind == "circle" else 4

def top_level_regions(kind: str, params: SubdivisionParams | None = None) -> int:
    params = params or SubdivisionParams()
    if kind == "hexagon":
        return 6
    if kind == "circle":
        return params.circle_sectors
    branching_factor(kind)  # valida el nombre
    return 1

def expected_total_units(kind: str, depth: int, params: SubdivisionParams | None = None) -> int:
    return branching_factor(kind) ** depth * top_level_regions(kind, params)

# ───────── Particiones de un nivel ─────────

def _split_triangle(tri: Tuple[Point, ...]) -> List[Tuple[Point, ...]]:
    a, b, c = tri
    ab, bc, ca = midpoint(a, b), midpoint(b, c), midpoint(c, a)
    # tres esquinas + triángulo central
    return [(a, ab, ca), (ab, b, bc), (ca, bc, c), (ab, bc, ca)]

def _split_quad(quad: Tuple[Point, ...]) -> List[Tuple[Point, ...]]:
    p0, p1, p2, p3 = quad
    m01, m12, m23, m30 = midpoint(p0, p1), midpoint(p1, p2), midpoint(p2, p3), midpoint(p3, p0)
    c = centroid((m01, m12, m23, m30))
    return [(p0, m01, c, m30), (m01, p1, m12, c), (c, m12, p2, m23), (m30, c, m23, p3)]

def _sector_polygon(center: Point, r: float, a0: float, a1: float, segments: int) -> Tuple[Point, ...]:
    arc = [arc_point(center, r, a0 + (a1 - a0) * i / segments) for i in range(segments + 1)]
    return (center, *arc)

# ───────── Recursión ─────────

def _keep_going(remaining: int, partial: bool, forced: bool, rng: RNG, params: SubdivisionParams) -> bool:
    if remaining <= 0:
        return False
    if forced or not partial:
        return True
    return rng.chance(params.continue_probability)

def _subdivide_polygon(poly, remaining: int, split, b: int, partial: bool, rng: RNG,
                       params: SubdivisionParams, forced: bool = False) -> List[Cell]:
    if not _keep_going(remaining, partial, forced, rng, params):
        # una celda gruesa absorbe todas las celdas finas que hubiera producido
        return [Cell(tuple(poly), b ** remaining)]
    out: List[Cell] = []
    for child in split(poly):
        out.extend(_subdivide_polygon(child, remaining - 1, split, b, partial, rng, params))
    return out

def _subdivide_sector(center: Point, r: float, a0: float, a1: float, remaining: int,
                      partial: bool, rng: RNG, params: SubdivisionParams, forced: bool = False) -> List[Cell]:
    if not _keep_going(remaining, partial, forced, rng, params):
        return [Cell(_sector_polygon(center, r, a0, a1, params.arc_segments), 2 ** remaining)]
    mid = (a0 + a1) / 2.0
    return (_subdivide_sector(center, r, a0, mid, remaining - 1, partial, rng, params)
            + _subdivide_sector(center, r, mid, a1, remaining - 1, partial, rng, params))

def subdivide(kind: str, depth: int, partial: bool, rng: RNG,
              params: SubdivisionParams | None = None) -> Tuple[Cell, ...]:
    """
    Particiona la figura base en celdas con peso entero ('units').

    - triangle: subdivisión por puntos medios (3 esquinas + centro).
    - square: puntos medios + centro de esos puntos medios (4 esquinas).
    - hexagon: 6 triángulos desde el centro, luego subdivisión de triángulos.
    - circle: sectores que se bisecan angularmente.

    Con partial=True cada rama decide si seguir; si se detiene emite una
    sola celda con units = b**restante, así la suma total no cambia.
    Si la figura tiene una sola región inicial, su primer corte siempre
    se hace (depth >= 1): un ejercicio nunca queda con una sola celda.
    """
    params = params or SubdivisionParams()
    if depth < 0:
        raise ValueError(f"La profundidad debe ser no negativa (recibió {depth}).")
    if params.arc_segments < 1 or params.circle_sectors < 1:
        raise ValueError("circle_sectors y arc_segments deben ser >= 1.")
    b = branching_factor(kind)

    cells: List[Cell] = []
    if kind == "circle":
        center, r = base_circle()
        n = params.circle_sectors
        start = -math.pi / 2.0  # primer sector arriba
        for k in range(n):
            a0 = start + 2.0 * math.pi * k / n
            a1 = start + 2.0 * math.pi * (k + 1) / n
            cells.extend(_subdivide_sector(center, r, a0, a1, depth, partial, rng, params, forced=(n == 1)))
    elif kind == "hexagon":
        hexa = base_outline(kind)
        c = centroid(hexa)
        for i in range(len(hexa)):
            tri = (c, hexa[i], hexa[(i + 1) % len(hexa)])
            cells.extend(_subdivide_polygon(tri, depth, _split_triangle, b, partial, rng, params))
    else:
        split = _split_triangle if kind == "triangle" else _split_quad
        cells = _subdivide_polygon(tuple(base_outline(kind)), depth, split, b, partial, rng, params, forced=True)

    logger.debug(f"subdivide({kind}, depth={depth}, partial={partial}) -> {len(cells)} celdas, "
                 f"{sum(c.units for c in cells)} unidades")
    return tuple(cells)

def total_units(cells) -> int:
    return sum(c.units for c in cells)
