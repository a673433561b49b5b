from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Any
import logging

from .seed import RNG, base36_to_int, int_to_base36
from .shapes import SHAPE_KINDS, resolve_shape_kind
from .subdivision import Cell, SubdivisionParams, subdivide, total_units
from .fraction import Fraction
from .target import pick_target_for_cells, is_correct

logger = logging.getLogger(__name__)

GEN_VERSION_EXERCISE = "fv-subdiv-1.1.0"

# Profundidad por dificultad. El círculo tiene su propia fila aunque hoy coincida.
DIFFICULTY_DEPTH: Dict[str, Dict[int, int]] = {
    "triangle": {1: 1, 2: 2, 3: 2},
    "square":   {1: 1, 2: 2, 3: 2},
    "hexagon":  {1: 1, 2: 2, 3: 2},
    "circle":   {1: 1, 2: 2, 3: 2},
}
PARTIAL_FROM_DIFFICULTY = 3

@dataclass(frozen=True)
class ShapeSpec:
    shape_kind: str
    cells: Tuple[Cell, ...]
    total_units: int
    target: Fraction
    target_units: int
    depth: int
    partial: bool
    difficulty: int
    seed: str
    portable_seed: str
    generator_version: str = GEN_VERSION_EXERCISE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shape_kind": self.shape_kind,
            "cells": [{"points": [list(p) for p in c.points], "units": c.units} for c in self.cells],
            "total_units": self.total_units,
            "target": self.target.as_dict(),
            "target_units": self.target_units,
            "depth": self.depth,
            "partial": self.partial,
            "difficulty": self.difficulty,
            "seed": self.seed,
            "portable_seed": self.portable_seed,
            "generator_version": self.generator_version,
        }

def depth_for(shape_kind: str, difficulty: int) -> int:
    row = DIFFICULTY_DEPTH[shape_kind]
    if difficulty not in row:
        raise ValueError(f"Dificultad inválida: {difficulty} (opciones: {sorted(row)}).")
    return row[difficulty]

# ───────── Seed portátil (FV1-<seed>-<payload>) ─────────

def _pack_payload(shape_index: int, difficulty: int, partial: int) -> int:
    return (shape_index << 3) | (difficulty << 1) | partial

def _unpack_payload(p: int) -> Dict[str, int]:
    return {"shape_index": p >> 3, "difficulty": (p >> 1) & 0b11, "partial": p & 1}

def make_portable_seed(seed_int: int, shape_kind: str, difficulty: int, partial: bool) -> str:
    payload = _pack_payload(SHAPE_KINDS.index(shape_kind), difficulty, 1 if partial else 0)
    return f"FV1-{int_to_base36(seed_int)}-{int_to_base36(payload)}"

def parse_portable_seed(ps: str) -> Optional[Dict[str, Any]]:
    """Devuelve los campos de una seed FV1 o None si no es válida."""
    ps = (ps or "").strip()
    if not ps.lower().startswith("fv1-"):
        return None
    parts = ps.split("-")
    if len(parts) != 3:
        return None
    try:
        seed_int = base36_to_int(parts[1])
        fields = _unpack_payload(base36_to_int(parts[2]))
    except ValueError:
        return None
    if fields["shape_index"] >= len(SHAPE_KINDS) or fields["difficulty"] not in (1, 2, 3):
        return None
    return {
        "seed_int": seed_int,
        "shape_kind": SHAPE_KINDS[fields["shape_index"]],
        "difficulty": fields["difficulty"],
        "partial": bool(fields["partial"]),
    }

# ───────── API ─────────

def generate(
    shape_kind: str = "auto",
    difficulty: int = 1,
    seed: str | int | None = None,
    partial: Optional[bool] = None,
    params: Optional[SubdivisionParams] = None,
    portable_seed: str | None = None,
) -> ShapeSpec:
    """Genera un ejercicio: figura subdividida + fracción objetivo alcanzable."""
    parsed = parse_portable_seed(portable_seed) if portable_seed else None
    if portable_seed and parsed is None:
        logger.warning(f"Seed portátil inválida '{portable_seed}'; se usa el modo normal.")
    if parsed:
        seed = parsed["seed_int"]
        shape_kind = parsed["shape_kind"]
        difficulty = parsed["difficulty"]
        partial = parsed["partial"]

    rng = RNG(seed)
    # flujo derivado: elegir la figura no consume el flujo principal
    kind = resolve_shape_kind(shape_kind, RNG(rng.seed_int ^ 0xF1A7))
    depth = depth_for(kind, difficulty)
    if partial is None:
        partial = difficulty >= PARTIAL_FROM_DIFFICULTY

    cells = subdivide(kind, depth, partial, rng, params)
    total = total_units(cells)
    target_units, target = pick_target_for_cells([c.units for c in cells], rng)

    logger.info(f"Ejercicio {kind} dif={difficulty} depth={depth} partial={partial}: "
                f"{len(cells)} celdas, objetivo {target_units}/{total} = {target}")
    return ShapeSpec(
        shape_kind=kind,
        cells=cells,
        total_units=total,
        target=target,
        target_units=target_units,
        depth=depth,
        partial=partial,
        difficulty=difficulty,
        seed=rng.seed_str,
        portable_seed=make_portable_seed(rng.seed_int, kind, difficulty, partial),
    )

def selection_units_sum(cells: Tuple[Cell, ...], selected: Iterable[int]) -> int:
    total = 0
    for i in set(selected):
        if not 0 <= i < len(cells):
            raise IndexError(f"Celda inexistente: {i} (hay {len(cells)}).")
        total += cells[i].units
    return total

def check_selection(spec: ShapeSpec, selected: Iterable[int]) -> bool:
    """True si las celdas elegidas suman exactamente la fracción objetivo."""
    return is_correct(selection_units_sum(spec.cells, selected), spec.target_units)
