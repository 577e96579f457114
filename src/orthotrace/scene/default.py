"""Default demo scene.

Ten spheres of eight materials lit by three point lights, laid out for an
800x600 orthographic view along +z. Pixel (x, y) looks down the line
(x, y, z), so sphere centers are given directly in pixel units.

Example:
    >>> from orthotrace.scene.default import create_default_scene
    >>> scene = create_default_scene()
    >>> len(scene.spheres), len(scene.lights)
    (10, 3)
"""

from orthotrace.scene.description import LightInfo, MaterialInfo, Scene, SphereInfo

# =============================================================================
# Default Scene Constants
# =============================================================================

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

# Every material shares a white 60-power highlight
SPECULAR = (1.0, 1.0, 1.0)
SPECULAR_POWER = 60.0

WHITE = MaterialInfo(diffuse=(1.0, 1.0, 1.0), reflection=1.0, specular=SPECULAR, power=SPECULAR_POWER)
RED = MaterialInfo(diffuse=(1.0, 0.0, 0.0), reflection=0.5, specular=SPECULAR, power=SPECULAR_POWER)
GREEN = MaterialInfo(diffuse=(0.0, 1.0, 0.0), reflection=0.5, specular=SPECULAR, power=SPECULAR_POWER)
BLUE = MaterialInfo(diffuse=(0.0, 0.0, 1.0), reflection=0.5, specular=SPECULAR, power=SPECULAR_POWER)
YELLOW = MaterialInfo(diffuse=(1.0, 1.0, 0.0), reflection=0.5, specular=SPECULAR, power=SPECULAR_POWER)
CYAN = MaterialInfo(diffuse=(0.0, 1.0, 1.0), reflection=0.5, specular=SPECULAR, power=SPECULAR_POWER)
MAGENTA = MaterialInfo(diffuse=(1.0, 0.0, 1.0), reflection=0.5, specular=SPECULAR, power=SPECULAR_POWER)
# Near-black mirror
BLACK = MaterialInfo(diffuse=(0.01, 0.01, 0.01), reflection=1.0, specular=SPECULAR, power=SPECULAR_POWER)

SPHERES = (
    SphereInfo(center=(400.0, 300.0, 0.0), radius=200.0, material=WHITE),
    SphereInfo(center=(300.0, 200.0, -350.0), radius=100.0, material=RED),
    SphereInfo(center=(400.0, 240.0, -500.0), radius=50.0, material=GREEN),
    SphereInfo(center=(600.0, 240.0, -350.0), radius=100.0, material=BLUE),
    SphereInfo(center=(600.0, 400.0, 200.0), radius=75.0, material=YELLOW),
    SphereInfo(center=(100.0, 400.0, 0.0), radius=75.0, material=CYAN),
    SphereInfo(center=(300.0, 400.0, -600.0), radius=75.0, material=MAGENTA),
    SphereInfo(center=(450.0, 300.0, -300.0), radius=50.0, material=BLACK),
    SphereInfo(center=(125.0, 200.0, -600.0), radius=120.0, material=YELLOW),
    SphereInfo(center=(600.0, 500.0, 0.0), radius=80.0, material=GREEN),
)

LIGHTS = (
    # Left light
    LightInfo(origin=(0.0, 200.0, -100.0), intensity=(2.0, 2.0, 2.0)),
    # Behind the camera
    LightInfo(origin=(640.0, 240.0, -10000.0), intensity=(0.4, 0.4, 0.5)),
    # Behind the white sphere
    LightInfo(origin=(640.0, 240.0, 100.0), intensity=(0.2, 0.2, 0.5)),
)


def create_default_scene(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> Scene:
    """Create the default demo scene.

    Args:
        width: Output width in pixels. Default is 800.
        height: Output height in pixels. Default is 600.

    Returns:
        A validated, immutable Scene. Changing width or height only changes
        the image bounds; the spheres and lights stay where they are.
    """
    return Scene(width=width, height=height, spheres=SPHERES, lights=LIGHTS)
