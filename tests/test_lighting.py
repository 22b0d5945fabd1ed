"""
Tests for the lighting engine.

Covers falloff, Schlick Fresnel, normalized Blinn-Phong reflectance and
the directional, point and spot light evaluators.
"""

import numpy as np
import pytest

from surface_shading.lighting import (
    DirectionalLight,
    PointLight,
    SpotLight,
    Material,
    LightType,
    light_from_dict,
    safe_normalize,
    attenuation,
    fresnel_schlick,
    blinn_phong,
    evaluate_directional,
    evaluate_point,
    evaluate_spot,
    evaluate_light,
    compute_lighting,
)

UP = np.array([[0.0, 1.0, 0.0]], dtype=np.float32)


class TestAttenuation:
    """Test the linear falloff ramp."""

    def test_full_strength_before_start(self):
        """Distances up to falloff_start are unattenuated."""
        assert attenuation(5.0, 10.0, 20.0) == 1.0
        assert attenuation(10.0, 10.0, 20.0) == 1.0

    def test_zero_at_and_beyond_end(self):
        """Distances at or past falloff_end give zero."""
        assert attenuation(20.0, 10.0, 20.0) == 0.0
        assert attenuation(25.0, 10.0, 20.0) == 0.0

    def test_linear_midpoint(self):
        """The ramp is linear between start and end."""
        assert attenuation(15.0, 10.0, 20.0) == pytest.approx(0.5)

    def test_monotonically_non_increasing(self):
        """Attenuation never increases with distance."""
        distances = np.linspace(0.0, 30.0, 301)
        values = attenuation(distances, 10.0, 20.0)

        assert values.shape == distances.shape
        assert np.all(np.diff(values) <= 0.0)
        assert values.min() >= 0.0 and values.max() <= 1.0

    def test_degenerate_range_is_step(self):
        """Equal start and end act as a step without dividing by zero."""
        with np.errstate(divide='raise', invalid='raise'):
            values = attenuation(np.array([4.0, 5.0, 6.0]), 5.0, 5.0)

        np.testing.assert_array_equal(values, [1.0, 1.0, 0.0])


class TestFresnel:
    """Test the Schlick approximation."""

    def test_normal_incidence_returns_r0(self):
        """At N·L = 1 the reflectance equals R0."""
        r0 = np.array([0.05, 0.2, 0.9], dtype=np.float32)
        result = fresnel_schlick(r0, UP, UP)

        np.testing.assert_allclose(result[0], r0, atol=1e-6)

    def test_grazing_incidence_approaches_one(self):
        """At N·L = 0 every channel reflects fully."""
        r0 = np.array([0.05, 0.2, 0.9], dtype=np.float32)
        grazing = np.array([[1.0, 0.0, 0.0]], dtype=np.float32)

        np.testing.assert_allclose(fresnel_schlick(r0, UP, grazing)[0], 1.0, atol=1e-6)

    def test_increases_toward_grazing(self):
        """Reflectance grows as the incidence angle widens."""
        angles = np.radians([0.0, 30.0, 60.0, 80.0, 89.0])
        light_dirs = np.stack([np.sin(angles), np.cos(angles), np.zeros_like(angles)], axis=1)
        normals = np.repeat(UP, len(angles), axis=0)

        result = fresnel_schlick([0.04, 0.04, 0.04], normals, light_dirs)

        assert np.all(np.diff(result[:, 0]) > 0.0)

    def test_back_facing_clamped(self):
        """Negative N·L is clamped like grazing incidence."""
        result = fresnel_schlick([0.1, 0.1, 0.1], UP, -UP)
        np.testing.assert_allclose(result[0], 1.0, atol=1e-6)


class TestBlinnPhong:
    """Test the reflectance model."""

    def test_non_negative_for_random_inputs(self):
        """Output is non-negative for arbitrary geometry."""
        rng = np.random.default_rng(7)
        n = 256
        normal = safe_normalize(rng.normal(size=(n, 3)))
        light_dir = safe_normalize(rng.normal(size=(n, 3)))
        to_eye = safe_normalize(rng.normal(size=(n, 3)))
        strength = rng.uniform(0.0, 3.0, size=(n, 3))

        material = Material(diffuse_albedo=[0.6, 0.5, 0.4, 1.0], fresnel_r0=[0.1, 0.1, 0.1], shininess=0.8)
        result = blinn_phong(strength, light_dir, normal, to_eye, material)

        assert result.shape == (n, 3)
        assert np.all(result >= 0.0)
        assert np.isfinite(result).all()

    def test_specular_compressed_below_one(self):
        """Compressed specular stays below 1 even for a very sharp lobe."""
        material = Material(diffuse_albedo=[0.0, 0.0, 0.0, 1.0], fresnel_r0=[1.0, 1.0, 1.0], shininess=10.0)
        result = blinn_phong(np.ones((1, 3)), UP, UP, UP, material)

        assert np.all(result < 1.0)
        assert np.all(result > 0.9)

    def test_matches_closed_form(self):
        """Aligned light, view and normal reproduce the formula."""
        material = Material(diffuse_albedo=[0.5, 0.5, 0.5, 1.0], fresnel_r0=[0.05, 0.05, 0.05], shininess=0.5)
        strength = np.array([[2.0, 2.0, 2.0]], dtype=np.float32)

        m = 0.5 * 256.0
        spec = 0.05 * (m + 8.0) / 8.0
        expected = (0.5 + spec / (spec + 1.0)) * 2.0

        result = blinn_phong(strength, UP, UP, UP, material)
        np.testing.assert_allclose(result[0], expected, rtol=1e-5)

    def test_opposite_view_and_light_no_nan(self):
        """A degenerate half-vector falls back to the normal."""
        result = blinn_phong(np.ones((1, 3)), UP, UP, -UP, Material())
        assert np.isfinite(result).all()


class TestDirectionalLight:
    """Test directional light evaluation."""

    def test_overhead_light(self):
        """Light straight down on an upward normal is fully incident."""
        light = DirectionalLight(strength=[1.0, 1.0, 1.0], direction=[0.0, -1.0, 0.0])
        material = Material(diffuse_albedo=[1.0, 1.0, 1.0, 1.0], fresnel_r0=[0.05, 0.05, 0.05], shininess=0.5)

        result = evaluate_directional(light, material, UP, UP)
        expected = blinn_phong(np.ones((1, 3)), UP, UP, UP, material)

        np.testing.assert_allclose(result, expected, rtol=1e-6)
        assert np.all(result > 1.0)

    def test_back_facing_is_zero(self):
        """A surface facing away from the light receives nothing."""
        light = DirectionalLight(direction=[0.0, -1.0, 0.0])
        result = evaluate_directional(light, Material(), -UP, -UP)

        np.testing.assert_array_equal(result, 0.0)

    def test_accepts_single_vectors(self):
        """(3,) inputs are promoted to one fragment."""
        result = evaluate_directional(DirectionalLight(), Material(), [0.0, 1.0, 0.0], [0.0, 1.0, 0.0])
        assert result.shape == (1, 3)


class TestPointLight:
    """Test point light evaluation."""

    def test_zero_beyond_range(self):
        """A surface past falloff_end receives exactly zero."""
        light = PointLight(strength=[1.0, 1.0, 1.0], position=[0.0, 25.0, 0.0],
                           falloff_start=10.0, falloff_end=20.0)
        result = evaluate_point(light, Material(), [0.0, 0.0, 0.0], UP, UP)

        np.testing.assert_array_equal(result, np.zeros((1, 3)))

    def test_within_start_matches_directional(self):
        """Inside falloff_start a point light overhead acts like a directional one."""
        material = Material(shininess=0.5)
        point = PointLight(position=[0.0, 5.0, 0.0], falloff_start=10.0, falloff_end=20.0)
        directional = DirectionalLight(direction=[0.0, -1.0, 0.0])

        np.testing.assert_allclose(
            evaluate_point(point, material, [0.0, 0.0, 0.0], UP, UP),
            evaluate_directional(directional, material, UP, UP),
            rtol=1e-5
        )

    def test_fades_continuously_toward_end(self):
        """Contribution shrinks toward zero as distance approaches falloff_end."""
        light = PointLight(position=[0.0, 0.0, 0.0], falloff_start=10.0, falloff_end=20.0)
        heights = np.array([12.0, 15.0, 18.0, 19.9, 19.999], dtype=np.float32)
        xyz = np.stack([np.zeros_like(heights), -heights, np.zeros_like(heights)], axis=1)
        normals = np.repeat(UP, len(heights), axis=0)

        result = evaluate_point(light, Material(), xyz, normals, normals)

        assert np.all(np.diff(result[:, 0]) < 0.0)
        assert result[-1, 0] < 1e-3

    def test_surface_at_light_position(self):
        """A zero-length light vector does not produce NaN."""
        light = PointLight(position=[0.0, 0.0, 0.0])
        result = evaluate_point(light, Material(), [0.0, 0.0, 0.0], UP, UP)

        assert np.isfinite(result).all()


class TestSpotLight:
    """Test spot light evaluation."""

    @staticmethod
    def _ring(angles_deg, radius=5.0):
        angles = np.radians(angles_deg)
        xyz = radius * np.stack([np.sin(angles), -np.cos(angles), np.zeros_like(angles)], axis=1)
        normals = safe_normalize(-xyz)
        return xyz.astype(np.float32), normals

    def test_decreases_with_cone_angle(self):
        """Equidistant points further off-axis receive strictly less light."""
        light = SpotLight(position=[0.0, 0.0, 0.0], direction=[0.0, -1.0, 0.0],
                          falloff_start=10.0, falloff_end=20.0, spot_power=8.0)
        xyz, normals = self._ring([0.0, 10.0, 20.0, 40.0, 60.0])

        result = evaluate_spot(light, Material(), xyz, normals, normals)

        assert np.all(np.diff(result[:, 0]) < 0.0)

    def test_zero_power_matches_point(self):
        """With spot_power = 0 inside the cone the spot equals a point light."""
        spot = SpotLight(position=[0.0, 0.0, 0.0], direction=[0.0, -1.0, 0.0],
                         falloff_start=10.0, falloff_end=20.0, spot_power=0.0)
        point = PointLight(position=[0.0, 0.0, 0.0], falloff_start=10.0, falloff_end=20.0)
        xyz, normals = self._ring([0.0, 30.0])

        np.testing.assert_allclose(
            evaluate_spot(spot, Material(), xyz, normals, normals),
            evaluate_point(point, Material(), xyz, normals, normals),
            rtol=1e-6
        )

    def test_behind_light_is_zero(self):
        """Points behind the aim direction get no cone contribution."""
        light = SpotLight(position=[0.0, 0.0, 0.0], direction=[0.0, -1.0, 0.0], spot_power=4.0)
        xyz = np.array([[0.0, 3.0, 0.0]], dtype=np.float32)
        normal = -UP

        np.testing.assert_array_equal(evaluate_spot(light, Material(), xyz, normal, normal), 0.0)

    def test_zero_beyond_range(self):
        """Spot lights also cut off hard at falloff_end."""
        light = SpotLight(position=[0.0, 25.0, 0.0], direction=[0.0, -1.0, 0.0],
                          falloff_start=10.0, falloff_end=20.0)
        result = evaluate_spot(light, Material(), [0.0, 0.0, 0.0], UP, UP)

        np.testing.assert_array_equal(result, 0.0)


class TestLightConfig:
    """Test light variants and parsing."""

    def test_from_dict_variants(self):
        """Each type key builds the matching variant."""
        assert light_from_dict({'type': 'directional'}).kind == LightType.DIRECTIONAL
        assert light_from_dict({'type': 'point'}).kind == LightType.POINT

        spot = light_from_dict({'type': 'Spot', 'spot_power': 3, 'falloff_end': 7})
        assert isinstance(spot, SpotLight)
        assert spot.spot_power == 3.0
        assert spot.falloff_end == 7.0

    def test_unknown_type_raises(self):
        """Unknown light types are rejected."""
        with pytest.raises(ValueError, match="Unknown light type"):
            light_from_dict({'type': 'area'})

    def test_direction_normalized(self):
        """Aim directions are stored as unit vectors."""
        light = DirectionalLight(direction=[0.0, -4.0, 3.0])
        np.testing.assert_allclose(light.direction, [0.0, -0.8, 0.6], atol=1e-6)

    def test_zero_direction_falls_back(self):
        """A zero-length direction points straight down."""
        light = DirectionalLight(direction=[0.0, 0.0, 0.0])
        np.testing.assert_array_equal(light.direction, [0.0, -1.0, 0.0])

    def test_to_dict_round_trip(self):
        """to_dict output parses back into an equivalent light."""
        light = SpotLight(strength=[0.5, 0.4, 0.3], position=[1.0, 2.0, 3.0], spot_power=12.0)
        restored = light_from_dict(light.to_dict())

        np.testing.assert_allclose(restored.position, light.position)
        assert restored.spot_power == light.spot_power

    def test_evaluate_light_rejects_unknown(self):
        """Dispatch refuses objects that are not light variants."""
        with pytest.raises(ValueError):
            evaluate_light(object(), Material(), UP, UP, UP)


class TestComputeLighting:
    """Test multi-light accumulation."""

    def test_contributions_sum(self):
        """Two identical lights contribute twice as much as one."""
        light = DirectionalLight(direction=[0.0, -1.0, 0.0])
        single = compute_lighting([light], Material(), [[0.0, 0.0, 0.0]], UP, UP)
        double = compute_lighting([light, light], Material(), [[0.0, 0.0, 0.0]], UP, UP)

        np.testing.assert_allclose(double, 2.0 * single, rtol=1e-6)

    def test_empty_light_list(self):
        """No lights means no direct radiance."""
        result = compute_lighting([], Material(), [[0.0, 0.0, 0.0]], UP, UP)
        np.testing.assert_array_equal(result, np.zeros((1, 3)))

    def test_shadow_factor_respects_cast_shadows(self):
        """Visibility only scales lights that cast shadows."""
        caster = DirectionalLight(direction=[0.0, -1.0, 0.0], cast_shadows=True)
        unshadowed = DirectionalLight(direction=[0.0, -1.0, 0.0], cast_shadows=False)
        xyz = [[0.0, 0.0, 0.0]]

        occluded = compute_lighting([caster, unshadowed], Material(), xyz, UP, UP,
                                    shadow_factor=np.zeros(1))
        expected = compute_lighting([unshadowed], Material(), xyz, UP, UP)

        np.testing.assert_allclose(occluded, expected, rtol=1e-6)


class TestSafeNormalize:
    """Test zero-length guarding."""

    def test_zero_vector_uses_fallback(self):
        """Zero rows take the fallback direction."""
        result = safe_normalize(np.array([[0.0, 0.0, 0.0], [3.0, 0.0, 4.0]]), fallback=[0.0, 1.0, 0.0])

        np.testing.assert_allclose(result, [[0.0, 1.0, 0.0], [0.6, 0.0, 0.8]], atol=1e-6)

    def test_default_fallback(self):
        """Without a fallback, zero rows become +Z."""
        np.testing.assert_array_equal(safe_normalize(np.zeros((1, 3))), [[0.0, 0.0, 1.0]])
