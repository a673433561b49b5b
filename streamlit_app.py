import json
import logging

import streamlit as st
from core.generator_exercise import generate, check_selection, selection_units_sum, GEN_VERSION_EXERCISE
from core.logging_config import setup_logging
from core.shapes import SHAPE_KINDS
from ui.render_svg import spec_to_svg, fraction_to_svg, FRACTION_MODES
from ui.render_png import spec_to_png_bytes

st.set_page_config(page_title="Fracciones visuales", page_icon="🔺", layout="wide")

if "logging_ready" not in st.session_state:
    setup_logging(level=logging.INFO)
    st.session_state["logging_ready"] = True

FRACTION_MODE_LABELS = {"sectors": "Sectores", "bars": "Barras", "dots": "Puntos"}

SHAPE_LABELS = {
    "auto": "Aleatoria",
    "triangle": "Triángulo",
    "square": "Cuadrado",
    "hexagon": "Hexágono",
    "circle": "Círculo",
}

DEFAULTS = {
    # Ejercicio
    "shape_kind": "auto",
    "difficulty": 1,
    "partial_mode": "auto",     # auto | regular | irregular
    "portable_seed_str": "",
    # Estilo (el color neutro es configuración explícita)
    "neutral_color": "#e6e6e6",
    "selected_color": "#4caf50",
    "stroke_color": "#333333",
    # Vista
    "show_labels": True,
    "fraction_mode": "sectors",  # dibujo de referencia: sectors | bars | dots
}

def reset_defaults():
    for k, v in DEFAULTS.items():
        st.session_state[k] = v
    st.session_state["replayed_seed"] = None

def new_exercise(**kwargs):
    st.session_state["exercise"] = generate(**kwargs)
    st.session_state["selected"] = set()
    st.session_state["picker_rev"] = st.session_state.get("picker_rev", 0) + 1
    st.session_state["feedback"] = None

if "initialized" not in st.session_state:
    reset_defaults()
    st.session_state["initialized"] = True
    st.session_state["selected"] = set()
    st.session_state["feedback"] = None

# Streamlit descarta el estado de widgets no dibujados en una corrida (p. ej. tras st.stop)
for k, v in DEFAULTS.items():
    st.session_state.setdefault(k, v)

st.title("Fracciones visuales — elegí las piezas")

# ───────────────────────────── Sidebar ─────────────────────────────
with st.sidebar:
    st.header("Controles")

    if st.button("Restablecer valores por defecto"):
        reset_defaults()

    shape_kind = st.selectbox(
        "Figura",
        options=["auto", *SHAPE_KINDS],
        index=["auto", *SHAPE_KINDS].index(st.session_state["shape_kind"]),
        format_func=lambda k: SHAPE_LABELS[k],
    )
    difficulty = st.radio(
        "Dificultad",
        options=[1, 2, 3],
        index=st.session_state["difficulty"] - 1,
        horizontal=True,
        help="1: un nivel de cortes · 2: dos niveles · 3: dos niveles con piezas irregulares.",
    )

    with st.expander("Avanzado", expanded=False):
        partial_mode = st.selectbox(
            "Piezas",
            options=["auto", "regular", "irregular"],
            index=["auto", "regular", "irregular"].index(st.session_state["partial_mode"]),
            help="'auto' usa piezas irregulares solo en dificultad 3.",
        )
        portable_seed_str = st.text_input(
            "Seed",
            value=st.session_state.get("portable_seed_str", ""),
            help="Pegá una seed FV1-... para reproducir exactamente el mismo ejercicio.",
            placeholder="FV1-...",
        )

    st.markdown("**Generar**")
    gen_btn = st.button("Nuevo ejercicio", type="primary", use_container_width=True)

if gen_btn or "exercise" not in st.session_state:
    st.session_state.update({
        "shape_kind": shape_kind,
        "difficulty": difficulty,
        "partial_mode": partial_mode,
        "portable_seed_str": portable_seed_str,
    })
    partial = {"auto": None, "regular": False, "irregular": True}[partial_mode]
    used_seed = portable_seed_str.strip()
    try:
        new_exercise(
            shape_kind=shape_kind,
            difficulty=int(difficulty),
            partial=partial,
            portable_seed=used_seed or None,
        )
    except ValueError as e:
        st.error(f"No se pudo generar el ejercicio: {e}")
        st.stop()
    st.session_state["replayed_seed"] = used_seed or None
    if used_seed:
        # la seed se usa una vez: el próximo "Nuevo ejercicio" vuelve a respetar el panel
        st.session_state["portable_seed_str"] = ""
        st.rerun()

# ───────────────────────────── Vista principal ─────────────────────────────
spec = st.session_state["exercise"]
selected = st.session_state["selected"]

head_l, head_r = st.columns([3, 1])
with head_l:
    st.markdown(f"### Seleccioná las piezas que forman **{spec.target}** de la figura")
    st.radio(
        "Referencia",
        options=list(FRACTION_MODES),
        format_func=lambda m: FRACTION_MODE_LABELS[m],
        horizontal=True,
        key="fraction_mode",
    )
with head_r:
    st.markdown(
        fraction_to_svg(
            spec.target,
            mode=st.session_state["fraction_mode"],
            width=160.0,
            filled_color=st.session_state["selected_color"],
            empty_color=st.session_state["neutral_color"],
            stroke_color=st.session_state["stroke_color"],
        ),
        unsafe_allow_html=True,
    )

left, right = st.columns([2, 1], gap="large")

with left:
    show_labels = st.checkbox("Numerar piezas", key="show_labels")

    svg = spec_to_svg(
        spec,
        selected=selected,
        neutral_color=st.session_state["neutral_color"],
        selected_color=st.session_state["selected_color"],
        stroke_color=st.session_state["stroke_color"],
        show_labels=show_labels,
    )
    st.markdown(svg, unsafe_allow_html=True)

    # Piezas: un toggle por celda (numeración 1..N como en el dibujo)
    picked = st.multiselect(
        "Piezas seleccionadas",
        options=list(range(len(spec.cells))),
        default=sorted(selected),
        format_func=lambda i: f"Pieza {i + 1}",
        key=f"picker_{spec.portable_seed}_{st.session_state.get('picker_rev', 0)}",
    )
    if set(picked) != selected:
        st.session_state["selected"] = set(picked)
        st.session_state["feedback"] = None
        st.rerun()

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Comprobar", type="primary", use_container_width=True):
            st.session_state["feedback"] = check_selection(spec, selected)
    with c2:
        if st.button("Limpiar selección", use_container_width=True):
            st.session_state["selected"] = set()
            st.session_state["feedback"] = None
            st.session_state["picker_rev"] = st.session_state.get("picker_rev", 0) + 1
            st.rerun()

    feedback = st.session_state.get("feedback")
    if feedback is True:
        st.success(f"¡Correcto! Las piezas elegidas forman {spec.target} de la figura.")
    elif feedback is False:
        st.error("Todavía no. Revisá el tamaño de cada pieza y probá de nuevo.")

    # Colores separados de la generación del ejercicio
    st.subheader("Colores")
    col_color1, col_color2, col_color3 = st.columns(3)
    with col_color1:
        st.color_picker("Neutro", key="neutral_color")
    with col_color2:
        st.color_picker("Seleccionado", key="selected_color")
    with col_color3:
        st.color_picker("Borde", key="stroke_color")

    st.markdown("<br>", unsafe_allow_html=True)
    col_dl1, col_dl2, col_dl3 = st.columns(3)
    with col_dl1:
        st.download_button(
            "Descargar SVG",
            data=svg.encode("utf-8"),
            file_name=f"fraccion_{spec.seed}.svg",
            mime="image/svg+xml",
            use_container_width=True,
        )
    with col_dl2:
        png = spec_to_png_bytes(
            spec,
            selected=selected,
            neutral_color=st.session_state["neutral_color"],
            selected_color=st.session_state["selected_color"],
            stroke_color=st.session_state["stroke_color"],
            show_labels=show_labels,
        )
        st.download_button(
            "Descargar PNG",
            data=png,
            file_name=f"fraccion_{spec.seed}.png",
            mime="image/png",
            use_container_width=True,
        )
    with col_dl3:
        st.download_button(
            "Descargar JSON",
            data=json.dumps(spec.to_dict(), ensure_ascii=False, indent=2).encode("utf-8"),
            file_name=f"fraccion_{spec.seed}.json",
            mime="application/json",
            use_container_width=True,
        )

with right:
    st.subheader("Metadatos")
    st.write(f"**Seed:** `{spec.portable_seed}`")
    if st.session_state.get("replayed_seed"):
        st.info("Ejercicio reproducido desde la **seed** pegada: figura y dificultad del panel **ignoradas**.")
    st.write(f"**Generador:** `{GEN_VERSION_EXERCISE}`")
    st.write(f"**Figura:** {SHAPE_LABELS[spec.shape_kind]} · **Dificultad:** {spec.difficulty}")
    st.write(f"**Piezas:** {len(spec.cells)}" + (" (irregulares)" if spec.partial else ""))

    with st.expander("Solución (docente)"):
        st.write(f"**Objetivo:** {spec.target_units} de {spec.total_units} unidades = {spec.target}")
        st.write(f"**Seleccionado ahora:** {selection_units_sum(spec.cells, selected)} unidades")
        st.json({f"Pieza {i + 1}": c.units for i, c in enumerate(spec.cells)})

st.caption("<div style='text-align: center;'>Fracciones visuales — generador de ejercicios</div>", unsafe_allow_html=True)
