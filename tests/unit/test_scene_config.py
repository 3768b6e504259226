from __future__ import annotations
from pathlib import Path

import numpy as np
import pytest

from eigenpath.config import SceneConfig, load_scene, loads_scene, scene_from_dict
from eigenpath.errors import EigenpathError, SceneLoadError, SceneNotFoundError
from eigenpath.presets import get_preset

DATA = Path(__file__).resolve().parents[1] / "data" / "scenes"


def test_defaults():
    cfg = SceneConfig()
    np.testing.assert_allclose(cfg.matrix, get_preset("Rotation (XY, 2rad)").matrix)
    assert cfg.preset == "Rotation (XY, 2rad)"
    assert cfg.scalar == 1.0 and cfg.exponent == 1 and cfg.normalize is False
    assert cfg.interpolation == "power"
    assert (cfg.start_t, cfg.end_t, cfg.precision) == (0.0, 2.0, 0.01)
    assert cfg.activation.name == "identity"
    assert len(cfg.vectors) == 1
    np.testing.assert_allclose(cfg.vectors[0].value, [2.0, 0.0, 0.5])
    assert cfg.walls == ()


def test_empty_document_is_the_default_scene():
    cfg = loads_scene("")
    assert cfg.preset == "Rotation (XY, 2rad)"
    assert len(cfg.vectors) == 1


def test_load_file_with_values():
    cfg = load_scene(DATA / "doubling_wall.toml")
    np.testing.assert_allclose(cfg.matrix, np.diag([2.0, 1.0, 1.0]))
    assert cfg.preset is None
    assert cfg.end_t == 1.0
    (vec,) = cfg.vectors
    assert vec.id == "probe" and vec.color == "#60a5fa"
    (wall,) = cfg.walls
    assert (wall.id, wall.axis, wall.position) == ("right", "x", 1.5)


def test_load_file_with_preset_and_alias():
    cfg = load_scene(DATA / "spiral.toml")
    np.testing.assert_allclose(cfg.matrix, get_preset("Spiral Sink (XY)").matrix)
    assert cfg.interpolation == "power"
    assert cfg.normalize is True
    assert cfg.activation.name == "tanh"
    assert [v.id for v in cfg.vectors] == ["a", "b"]
    assert cfg.vectors[1].visible is False
    assert [w.axis for w in cfg.walls] == ["z", "y"]


def test_vector_ids_and_colors_default_by_position():
    cfg = loads_scene(
        """
        [[vectors]]
        value = [1, 0, 0]
        [[vectors]]
        value = [0, 1, 0]
        """
    )
    assert [v.id for v in cfg.vectors] == [0, 1]
    assert cfg.vectors[0].color != cfg.vectors[1].color


def test_exponent_is_rounded():
    cfg = loads_scene("[matrix]\nexponent = 2.6\n")
    assert cfg.exponent == 3


def test_missing_file(tmp_path: Path):
    with pytest.raises(SceneNotFoundError) as ei:
        load_scene(tmp_path / "nope.toml")
    assert "Scene not found" in str(ei.value)
    assert isinstance(ei.value, EigenpathError)


def test_invalid_toml(tmp_path: Path):
    bad = tmp_path / "bad.toml"
    bad.write_text("[matrix\nvalues = 1\n", encoding="utf-8")
    with pytest.raises(SceneLoadError, match="Invalid scene TOML"):
        load_scene(bad)


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("[camera]\nfov = 1\n", "Unknown top-level"),
        ('[matrix]\npreset = "Shear"\nvalues = [[1,0,0],[0,1,0],[0,0,1]]\n', "not both"),
        ("[matrix]\nvalues = [[1,0,0],[0,1,0]]\n", "3 rows"),
        ("[matrix]\nvalues = [[1,0,0],[0,1,0],[0,0]]\n", "3 finite numbers"),
        ('[matrix]\nscalar = "big"\n', "scalar"),
        ("[matrix]\nnormalize = 1\n", "normalize"),
        ('[matrix]\npreset = "Nope"\n', "Unknown preset"),
        ('[matrix]\ninterpolation = "cubic"\n', "Unknown interpolation mode"),
        ("[sampling]\nprecision = 0\n", "precision"),
        ("[sampling]\nstart = inf\n", "finite"),
        ('[activation]\nname = "swish"\n', "Unknown activation"),
        ("[[vectors]]\nvalue = [1, 2]\n", "value"),
        ("[[vectors]]\nid = 1\nvalue = [1,0,0]\n[[vectors]]\nid = 1\nvalue = [0,1,0]\n", "duplicate"),
        ('[[walls]]\naxis = "w"\n', "axis"),
        ('[[walls]]\nid = "a"\n[[walls]]\nid = "a"\n', "duplicate"),
    ],
)
def test_validation_errors(text, fragment):
    with pytest.raises(SceneLoadError) as ei:
        loads_scene(text)
    assert fragment in str(ei.value)


def test_scene_from_dict_accepts_parsed_mapping():
    cfg = scene_from_dict({"matrix": {"preset": "Shear"}, "walls": [{"axis": "y", "position": 2}]})
    assert cfg.preset == "Shear"
    assert cfg.walls[0].position == 2.0
    assert cfg.walls[0].id == 0


def test_config_matrix_is_read_only():
    cfg = SceneConfig(matrix=np.eye(3))
    with pytest.raises(ValueError):
        cfg.matrix[0, 0] = 2.0
