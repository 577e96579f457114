"""Immutable scene description values.

A scene is built once, validated, and then handed to the renderer. Nothing
in here touches Taichi: these are plain host-side values, uploaded to the
device by SceneBuffers.

Example:
    >>> red = MaterialInfo(diffuse=(1.0, 0.0, 0.0), reflection=0.5)
    >>> scene = Scene(
    ...     width=64,
    ...     height=48,
    ...     spheres=[SphereInfo(center=(32.0, 24.0, 0.0), radius=20.0, material=red)],
    ...     lights=[LightInfo(origin=(0.0, 0.0, -100.0), intensity=(1.0, 1.0, 1.0))],
    ... )
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

# RGB color or XYZ position
Triple = tuple[float, float, float]


def _as_triple(name: str, value: Sequence[float]) -> Triple:
    """Convert a 3-sequence to a tuple of finite floats."""
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"{name} must have exactly 3 components, got {len(values)}")
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"{name} components must be finite, got {values}")
    return values  # type: ignore[return-value]


def _as_color(name: str, value: Sequence[float]) -> Triple:
    """Convert a 3-sequence to a color with non-negative channels."""
    color = _as_triple(name, value)
    if any(c < 0.0 for c in color):
        raise ValueError(f"{name} channels must be non-negative, got {color}")
    return color


@dataclass(frozen=True)
class MaterialInfo:
    """Surface material shared by any number of spheres.

    Attributes:
        diffuse: Diffuse (Lambertian) color.
        reflection: Fraction of incoming light carried into the next bounce,
            in [0, 1].
        specular: Specular highlight color.
        power: Specular exponent (>= 1).
    """

    diffuse: Triple
    reflection: float = 0.0
    specular: Triple = (1.0, 1.0, 1.0)
    power: float = 60.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "diffuse", _as_color("diffuse", self.diffuse))
        object.__setattr__(self, "specular", _as_color("specular", self.specular))
        if not 0.0 <= self.reflection <= 1.0:
            raise ValueError(f"Reflection must be in [0, 1], got {self.reflection}")
        if not self.power >= 1.0:
            raise ValueError(f"Specular power must be >= 1, got {self.power}")


@dataclass(frozen=True)
class SphereInfo:
    """A sphere in the scene.

    Attributes:
        center: Center of the sphere.
        radius: Radius of the sphere (> 0).
        material: The sphere's material.
    """

    center: Triple
    radius: float
    material: MaterialInfo

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_triple("center", self.center))
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


@dataclass(frozen=True)
class LightInfo:
    """A point light.

    Attributes:
        origin: Position of the light.
        intensity: Per-channel brightness. Values above 1.0 are allowed.
    """

    origin: Triple
    intensity: Triple

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _as_triple("origin", self.origin))
        object.__setattr__(self, "intensity", _as_color("intensity", self.intensity))


@dataclass(frozen=True)
class Scene:
    """Everything the renderer needs to produce one image.

    Sphere and light sequences are frozen into tuples, so a Scene can be
    shared between renderers and tests without copying.

    Attributes:
        width: Output width in pixels.
        height: Output height in pixels.
        spheres: Spheres in the scene (order is not significant).
        lights: Point lights in the scene (order is not significant).
    """

    width: int
    height: int
    spheres: tuple[SphereInfo, ...] = field(default_factory=tuple)
    lights: tuple[LightInfo, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Scene {name} must be a positive integer, got {value!r}")

        spheres = tuple(self.spheres)
        lights = tuple(self.lights)
        for sphere in spheres:
            if not isinstance(sphere, SphereInfo):
                raise ValueError(f"Expected SphereInfo, got {type(sphere).__name__}")
        for light in lights:
            if not isinstance(light, LightInfo):
                raise ValueError(f"Expected LightInfo, got {type(light).__name__}")
        object.__setattr__(self, "spheres", spheres)
        object.__setattr__(self, "lights", lights)

    def materials(self) -> list[MaterialInfo]:
        """Return the distinct materials in order of first use."""
        seen: dict[MaterialInfo, None] = {}
        for sphere in self.spheres:
            seen.setdefault(sphere.material, None)
        return list(seen)
