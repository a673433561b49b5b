from __future__ import annotations
import math
from typing import Dict, List, Sequence, Tuple

from .seed import RNG

Point = Tuple[float, float]

SHAPE_KINDS: Tuple[str, ...] = ("triangle", "square", "hexagon", "circle")
AUTO = "auto"

# Lienzo compartido por todas las figuras (coordenadas SVG: y hacia abajo)
CANVAS_SIZE = 400.0
CENTER: Point = (CANVAS_SIZE / 2.0, CANVAS_SIZE / 2.0)
RADIUS = 170.0

# Cantidad de vértices esperada por contorno poligonal
_VERTEX_COUNT: Dict[str, int] = {"triangle": 3, "square": 4, "hexagon": 6}

# ───────── Utilidades geométricas ─────────

def midpoint(p: Point, q: Point) -> Point:
    return ((p[0] + q[0]) / 2.0, (p[1] + q[1]) / 2.0)

def centroid(points: Sequence[Point]) -> Point:
    """Promedio de vértices (no el centroide de área)."""
    n = len(points)
    return (sum(x for x, _ in points) / n, sum(y for _, y in points) / n)

def polygon_area(points: Sequence[Point]) -> float:
    """Área con signo por la fórmula del cordón (shoelace)."""
    if len(points) < 3:
        return 0.0
    A = 0.0
    for i in range(len(points)):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % len(points)]
        A += x1 * y2 - x2 * y1
    return 0.5 * A

def arc_point(center: Point, r: float, angle: float) -> Point:
    return (center[0] + r * math.cos(angle), center[1] + r * math.sin(angle))

# ───────── Contornos canónicos ─────────

def _regular_polygon(n: int, r: float, start_angle: float) -> List[Point]:
    return [arc_point(CENTER, r, start_angle + 2.0 * math.pi * k / n) for k in range(n)]

def check_outline(kind: str, points: Sequence[Point]) -> List[Point]:
    want = _VERTEX_COUNT.get(kind)
    if want is None:
        raise ValueError(f"'{kind}' no tiene contorno poligonal.")
    if len(points) != want:
        raise ValueError(f"El contorno de '{kind}' necesita {want} vértices (recibió {len(points)}).")
    if abs(polygon_area(points)) < 1e-9:
        raise ValueError(f"El contorno de '{kind}' es degenerado (área nula).")
    return list(points)

def base_outline(kind: str) -> List[Point]:
    """Contorno canónico de triángulo, cuadrado o hexágono inscripto en el lienzo."""
    if kind == "triangle":
        # equilátero con un vértice arriba
        pts = _regular_polygon(3, RADIUS, -math.pi / 2.0)
    elif kind == "square":
        m = CANVAS_SIZE / 2.0 - RADIUS * math.sqrt(0.5)
        pts = [(m, m), (CANVAS_SIZE - m, m), (CANVAS_SIZE - m, CANVAS_SIZE - m), (m, CANVAS_SIZE - m)]
    elif kind == "hexagon":
        pts = _regular_polygon(6, RADIUS, 0.0)
    else:
        raise ValueError(f"Figura desconocida: '{kind}'.")
    return check_outline(kind, pts)

def base_circle() -> Tuple[Point, float]:
    return CENTER, RADIUS

def resolve_shape_kind(kind: str, rng: RNG) -> str:
    kind = (kind or AUTO).strip().lower()
    if kind == AUTO:
        return rng.choice(SHAPE_KINDS)
    if kind not in SHAPE_KINDS:
        raise ValueError(f"Figura desconocida: '{kind}' (opciones: {', '.join(SHAPE_KINDS + (AUTO,))}).")
    return kind
