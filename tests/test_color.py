"""Tests for exposure tone mapping and sRGB encoding.

Tests cover:
- Exposure of black and of bright colors
- The linear and power segments of the sRGB curve
- Monotonicity of the encoding on [0, 1]
"""

import math

import numpy as np
import pytest
import taichi as ti


def _srgb(c):
    if c > 0.0031308:
        return 1.055 * c ** (1.0 / 2.4) - 0.055
    return 12.92 * c


class TestExpose:
    """Tests for the exposure tone map."""

    def test_black_stays_black(self):
        from orthotrace.core.color import expose, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = expose(vec3(0.0, 0.0, 0.0), 1.0)

        test_kernel()
        r = result[None]
        assert (r[0], r[1], r[2]) == (0.0, 0.0, 0.0)

    def test_exposure_formula(self):
        from orthotrace.core.color import expose, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = expose(vec3(1.0, 2.0, 0.5), 2.0)

        test_kernel()
        r = result[None]
        assert r[0] == pytest.approx(1.0 - math.exp(-2.0), abs=1e-6)
        assert r[1] == pytest.approx(1.0 - math.exp(-4.0), abs=1e-6)
        assert r[2] == pytest.approx(1.0 - math.exp(-1.0), abs=1e-6)

    def test_bright_colors_stay_below_one(self):
        """Test unbounded input maps into [0, 1]."""
        from orthotrace.core.color import expose, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = expose(vec3(5.0, 20.0, 100.0), 1.0)

        test_kernel()
        r = result[None]
        assert all(0.99 < r[i] <= 1.0 for i in range(3))


class TestSrgbEncode:
    """Tests for the sRGB transfer function."""

    @pytest.mark.parametrize("c", [0.0, 0.001, 0.0031308, 0.01, 0.2, 0.5, 1.0])
    def test_channel_values(self, c):
        from orthotrace.core.color import srgb_encode_channel

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = srgb_encode_channel(c)

        test_kernel()
        assert result[None] == pytest.approx(_srgb(c), abs=1e-5)

    def test_end_points(self):
        from orthotrace.core.color import srgb_encode, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = srgb_encode(vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert r[0] == 0.0
        assert r[1] == pytest.approx(1.0, abs=1e-5)
        assert r[2] == 0.0

    def test_monotonic_on_unit_interval(self):
        from orthotrace.core.color import srgb_encode_channel

        n = 257
        values = ti.field(dtype=ti.f32, shape=n)
        encoded = ti.field(dtype=ti.f32, shape=n)
        values.from_numpy(np.linspace(0.0, 1.0, n, dtype=np.float32))

        @ti.kernel
        def test_kernel():
            for i in range(n):
                encoded[i] = srgb_encode_channel(values[i])

        test_kernel()
        out = encoded.to_numpy()
        assert np.all(np.diff(out) > 0.0)
