from __future__ import annotations
from typing import Collection, List, Tuple
from io import BytesIO
from PIL import Image, ImageDraw, ImageFont
import numpy as np

from core.generator_exercise import ShapeSpec
from core.shapes import CANVAS_SIZE

def _rgb(hexstr: str) -> Tuple[int, int, int]:
    hexstr = hexstr.lstrip("#")
    return tuple(int(hexstr[i:i+2], 16) for i in (0, 2, 4))

def spec_to_png_bytes(
    spec: ShapeSpec,
    selected: Collection[int] = (),
    margin: float = 10.0,
    scale: int = 3,
    neutral_color: str = "#e6e6e6",
    selected_color: str = "#4caf50",
    stroke_color: str = "#333333",
    label_color: str = "#111111",
    show_labels: bool = False,
) -> bytes:
    size = int((CANVAS_SIZE + 2 * margin) * scale)
    img = Image.new("RGB", (size, size), "white")
    draw = ImageDraw.Draw(img)

    neutral_rgb = _rgb(neutral_color)
    selected_rgb = _rgb(selected_color)
    stroke_rgb = _rgb(stroke_color)
    label_rgb = _rgb(label_color)
    width = max(1, scale // 2)

    chosen = set(selected)
    centers: List[Tuple[int, int]] = []
    for i, cell in enumerate(spec.cells):
        # coordenadas del lienzo -> píxeles
        px = np.rint((np.asarray(cell.points, dtype=float) + margin) * scale).astype(int)
        pts = [tuple(p) for p in px.tolist()]
        draw.polygon(pts, fill=selected_rgb if i in chosen else neutral_rgb)
        # bordes explícitos (polygon(outline=) no respeta el grosor en todas las versiones)
        for a, b in zip(pts, pts[1:] + pts[:1]):
            draw.line([a, b], fill=stroke_rgb, width=width)
        cx, cy = px.mean(axis=0)
        centers.append((int(cx), int(cy)))

    if show_labels:
        font = ImageFont.load_default()
        for i, (cx, cy) in enumerate(centers):
            s = str(i + 1)
            draw.text((cx - 3 * len(s), cy - 5), s, fill=label_rgb, font=font)

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
