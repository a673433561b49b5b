from pathlib import Path

from streamlit.testing.v1 import AppTest

from core.generator_exercise import generate

APP = str(Path(__file__).resolve().parent.parent / "streamlit_app.py")


def _app() -> AppTest:
    at = AppTest.from_file(APP, default_timeout=60)
    at.run()
    assert not at.exception
    return at


def _sidebar_button(at: AppTest, label: str):
    return next(b for b in at.sidebar.button if b.label == label)


def test_reset_restores_view_and_colors() -> None:
    at = _app()
    at.checkbox(key="show_labels").uncheck().run()
    at.color_picker(key="neutral_color").pick("#123456").run()
    at.radio(key="fraction_mode").set_value("dots").run()
    assert at.session_state["neutral_color"] == "#123456"
    assert at.session_state["show_labels"] is False

    _sidebar_button(at, "Restablecer valores por defecto").click().run()
    assert not at.exception
    assert at.session_state["neutral_color"] == "#e6e6e6"
    assert at.session_state["show_labels"] is True
    assert at.session_state["fraction_mode"] == "sectors"
    assert at.checkbox(key="show_labels").value is True


def test_pasted_seed_is_used_once() -> None:
    original = generate("circle", 2, seed=77)
    at = _app()
    at.sidebar.selectbox[0].select_index(2)  # square
    at.sidebar.text_input[0].input(original.portable_seed)
    _sidebar_button(at, "Nuevo ejercicio").click().run()
    assert not at.exception
    assert at.session_state["exercise"].to_dict() == original.to_dict()
    assert at.session_state["portable_seed_str"] == ""
    assert at.sidebar.text_input[0].value == ""
    assert any("seed" in info.value for info in at.info)

    _sidebar_button(at, "Nuevo ejercicio").click().run()
    assert not at.exception
    assert at.session_state["exercise"].shape_kind == "square"
    assert not at.info


def test_target_reference_drawing_is_shown() -> None:
    at = _app()
    spec = at.session_state["exercise"]
    assert any("<title>Fracción" in md.value for md in at.markdown)
    assert any(f"**{spec.target}**" in md.value for md in at.markdown)
