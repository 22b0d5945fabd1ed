"""
Tests for conversion, validation and debug utilities.
"""

import numpy as np
import pytest

from surface_shading.utils import (
    as_vector_rows,
    normalize_to_float32,
    to_numpy_array,
    to_torch_tensor,
    validate_fragment_inputs,
    is_debug_enabled,
    debug_print,
    debug_log,
    debug_array_info,
)
from surface_shading.utils.debug import DEBUG_ENV_VAR


class TestConversion:
    """Test array conversion helpers."""

    def test_single_vector_promoted(self):
        """A (3,) vector becomes one row."""
        rows = as_vector_rows([1, 2, 3])

        assert rows.shape == (1, 3)
        assert rows.dtype == np.float32

    def test_wrong_width_raises(self):
        """Rows of the wrong width are rejected."""
        with pytest.raises(ValueError, match=r"\(N, 4\)"):
            as_vector_rows(np.zeros((2, 3)), width=4)

    def test_uint8_scaled(self):
        """uint8 texels map to [0, 1]."""
        result = normalize_to_float32(np.array([0, 51, 255], dtype=np.uint8))
        np.testing.assert_allclose(result, [0.0, 0.2, 1.0], atol=1e-6)

    def test_float_passes_through(self):
        """Float colors keep their values, HDR included."""
        result = normalize_to_float32(np.array([0.0, 0.5, 2.5]))

        assert result.dtype == np.float32
        np.testing.assert_array_equal(result, [0.0, 0.5, 2.5])

    def test_torch_round_trip(self):
        """Tensors convert to arrays and back."""
        torch = pytest.importorskip("torch")

        tensor = to_torch_tensor([[1.0, 2.0, 3.0]])
        assert isinstance(tensor, torch.Tensor)
        np.testing.assert_array_equal(to_numpy_array(tensor), [[1.0, 2.0, 3.0]])


class TestValidation:
    """Test fragment input validation."""

    def test_valid_inputs_pass(self):
        """Consistent shapes and finite values raise nothing."""
        validate_fragment_inputs(np.zeros((2, 3)), np.ones((2, 3)), np.ones((2, 4)), np.ones(4))

    def test_non_finite_normal_raises(self):
        """NaN normals are rejected."""
        normal = np.ones((1, 3))
        normal[0, 1] = np.nan

        with pytest.raises(ValueError, match="normal"):
            validate_fragment_inputs(np.zeros((1, 3)), normal, np.ones((1, 4)), np.ones(4))

    def test_base_color_shape_raises(self):
        """Base colors must be RGBA."""
        with pytest.raises(ValueError, match="base_color"):
            validate_fragment_inputs(np.zeros((1, 3)), np.ones((1, 3)), np.ones((1, 4)), np.ones(3))


class TestDebug:
    """Test environment-gated debug output."""

    @pytest.mark.parametrize("value, enabled", [("1", True), ("yes", True), ("0", False), ("false", False), ("", False)])
    def test_env_toggle(self, monkeypatch, value, enabled):
        """SHADING_DEBUG switches tracing on and off."""
        monkeypatch.setenv(DEBUG_ENV_VAR, value)
        assert is_debug_enabled() is enabled

    def test_prints_only_when_enabled(self, monkeypatch, capsys):
        """debug_print and debug_array_info are silent by default."""
        monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)
        debug_print("[Test] hidden")
        assert capsys.readouterr().out == ""

        monkeypatch.setenv(DEBUG_ENV_VAR, "1")
        debug_array_info("Test", np.array([0.0, 1.0]))
        out = capsys.readouterr().out
        assert "[Test]" in out and "max=1.0000" in out

    def test_log_tags_component(self, monkeypatch, capsys):
        """debug_log prefixes the message with its component name."""
        monkeypatch.setenv(DEBUG_ENV_VAR, "1")
        debug_log("Shadow", "bound 8x8 map")
        debug_array_info("Shadow", np.zeros((0, 3)))

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "[Shadow] bound 8x8 map"
        assert lines[1] == "[Shadow] shape=(0, 3) dtype=float64 (empty)"
