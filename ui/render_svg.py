from __future__ import annotations
from typing import Collection, List, Tuple
import math

from core.fraction import Fraction
from core.generator_exercise import ShapeSpec
from core.shapes import CANVAS_SIZE, centroid

def _svg_header(w: float, h: float) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {w} {h}" width="100%" '
        f'style="height:auto;display:block" preserveAspectRatio="xMidYMid meet" role="img">'
    )

def _svg_footer() -> str:
    return "</svg>"

def _style(neutral_color: str, selected_color: str, stroke_color: str, label_color: str) -> str:
    return f"""
  <style>
    .solid-bg {{ fill: #fff; stroke: none; }}
    .cell     {{ fill: {neutral_color}; stroke: {stroke_color}; stroke-width: 1.5; stroke-linejoin: round; }}
    .cell-on  {{ fill: {selected_color}; stroke: {stroke_color}; stroke-width: 1.5; stroke-linejoin: round; }}
    .txt-label {{ font-family: Arial, sans-serif; font-size: 11px; fill: {label_color}; font-weight: 600; }}
  </style>
"""

def _text(x, y, s, anchor="middle", klass="txt-label"):
    return f'<text x="{x:.2f}" y="{y:.2f}" class="{klass}" text-anchor="{anchor}" dominant-baseline="middle">{s}</text>'

def _rect(x, y, w, h, klass="solid-bg"):
    return f'<rect x="{x}" y="{y}" width="{w}" height="{h}" class="{klass}" />'

def _path_from_polyline(points) -> str:
    if not points:
        return ""
    d = [f"M {points[0][0]:.2f} {points[0][1]:.2f}"]
    for (x, y) in points[1:]:
        d.append(f"L {x:.2f} {y:.2f}")
    d.append("Z")
    return " ".join(d)

def spec_to_svg(
    spec: ShapeSpec,
    selected: Collection[int] = (),
    margin: float = 10.0,
    neutral_color: str = "#e6e6e6",
    selected_color: str = "#4caf50",
    stroke_color: str = "#333333",
    label_color: str = "#111111",
    show_labels: bool = False,
) -> str:
    """Dibuja cada celda como un <path>; las seleccionadas usan selected_color.
    El color neutro llega por parámetro (no se lee de estilos globales)."""
    size = CANVAS_SIZE + 2 * margin
    svg: List[str] = [_svg_header(size, size), _style(neutral_color, selected_color, stroke_color, label_color)]
    svg.append(_rect(0, 0, size, size, "solid-bg"))

    chosen = set(selected)
    for i, cell in enumerate(spec.cells):
        pts: List[Tuple[float, float]] = [(x + margin, y + margin) for (x, y) in cell.points]
        klass = "cell-on" if i in chosen else "cell"
        svg.append(f'<path d="{_path_from_polyline(pts)}" class="{klass}" data-index="{i}" />')

    if show_labels:
        for i, cell in enumerate(spec.cells):
            cx, cy = centroid(cell.points)
            svg.append(_text(cx + margin, cy + margin, str(i + 1)))

    svg.append(_svg_footer())
    return "\n".join(svg)

# ───────── Fracción de referencia ─────────

FRACTION_MODES = ("sectors", "bars", "dots")

def fraction_to_svg(
    fraction: Fraction,
    mode: str = "sectors",
    width: float = 200.0,
    filled_color: str = "#4caf50",
    empty_color: str = "#eeeeee",
    stroke_color: str = "#333333",
    dots_per_row: int = 10,
) -> str:
    """
    Dibujo de referencia de una fracción propia n/d:
    - sectors: círculo en d sectores, n rellenos, empezando arriba.
    - bars: barra en d rectángulos.
    - dots: d puntos en filas de dots_per_row.
    Incluye un <title> para lectores de pantalla.
    """
    n, d = fraction.numerator, fraction.denominator
    if mode not in FRACTION_MODES:
        raise ValueError(f"Modo desconocido: '{mode}' (opciones: {', '.join(FRACTION_MODES)}).")
    if d < 1 or not 0 <= n <= d:
        raise ValueError(f"Solo se dibujan fracciones propias no negativas (recibió {fraction}).")

    def fill(i: int) -> str:
        return filled_color if i < n else empty_color

    parts: List[str] = []
    if mode == "sectors":
        h = width
        c, r = width / 2.0, width / 2.0 - 2.0
        if d == 1:
            parts.append(f'<circle cx="{c:.2f}" cy="{c:.2f}" r="{r:.2f}" fill="{fill(0)}" stroke="{stroke_color}" />')
            d_sectors = 0
        else:
            d_sectors = d
        for i in range(d_sectors):
            a0 = -math.pi / 2.0 + 2.0 * math.pi * i / d
            a1 = -math.pi / 2.0 + 2.0 * math.pi * (i + 1) / d
            x1, y1 = c + r * math.cos(a0), c + r * math.sin(a0)
            x2, y2 = c + r * math.cos(a1), c + r * math.sin(a1)
            large = 1 if a1 - a0 > math.pi else 0
            d_attr = f"M {c:.2f} {c:.2f} L {x1:.2f} {y1:.2f} A {r:.2f} {r:.2f} 0 {large} 1 {x2:.2f} {y2:.2f} Z"
            parts.append(f'<path d="{d_attr}" fill="{fill(i)}" stroke="{stroke_color}" stroke-width="1" />')
    elif mode == "bars":
        h = 30.0
        w = width / d
        for i in range(d):
            parts.append(f'<rect x="{i * w:.2f}" y="0" width="{w:.2f}" height="{h}" '
                         f'fill="{fill(i)}" stroke="{stroke_color}" stroke-width="1" />')
    else:
        step = width / dots_per_row
        rows = (d + dots_per_row - 1) // dots_per_row
        h = rows * step
        for i in range(d):
            cx = (i % dots_per_row + 0.5) * step
            cy = (i // dots_per_row + 0.5) * step
            parts.append(f'<circle cx="{cx:.2f}" cy="{cy:.2f}" r="{step * 0.35:.2f}" fill="{fill(i)}" />')

    svg = [_svg_header(width, h), f"<title>Fracción {n} sobre {d}</title>", *parts, _svg_footer()]
    return "\n".join(svg)
