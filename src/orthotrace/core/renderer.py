"""Frame renderer with row-batched progress reporting.

The Renderer owns one scene's device buffers and a color buffer, and runs
the frame kernel over all pixels. Rendering can be split into row batches
so a caller gets progress updates:
- Single call rendering of the full frame
- Batch rendering with a progress callback after each batch
- Generator-based progress for iterative processing

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orthotrace.core.renderer import Renderer
    >>> from orthotrace.scene.default import create_default_scene
    >>>
    >>> renderer = Renderer(create_default_scene())
    >>> renderer.render()
    >>> renderer.save_bmp("output.bmp")
"""

import logging
import math
import time
from collections.abc import Callable, Generator
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import numpy.typing as npt
import taichi as ti

from orthotrace.core.integrator import CAMERA_Z, sample_pixel
from orthotrace.output.raster import save_bmp
from orthotrace.scene.buffers import SceneBuffers
from orthotrace.scene.description import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Default exposure factor for tone mapping
DEFAULT_EXPOSURE = 1.0


@dataclass(frozen=True)
class RenderSettings:
    """Camera and tone mapping settings for a render.

    Attributes:
        exposure: Exposure factor applied per sample, 1 - exp(-c * exposure).
        camera_z: z coordinate of the orthographic camera plane. Must lie in
            front of every sphere for the whole scene to be visible.
    """

    exposure: float = DEFAULT_EXPOSURE
    camera_z: float = CAMERA_Z

    def __post_init__(self) -> None:
        if not (math.isfinite(self.exposure) and self.exposure > 0.0):
            raise ValueError(f"Exposure must be a positive number, got {self.exposure}")
        if not math.isfinite(self.camera_z):
            raise ValueError(f"Camera z must be finite, got {self.camera_z}")


@ti.data_oriented
class Renderer:
    """Renders a Scene into a color buffer.

    Pixels are independent, so the frame kernel runs them in parallel; the
    four samples of a pixel and the bounces of each sample are evaluated in
    a fixed order, which makes repeated renders identical.

    Attributes:
        scene: The Scene being rendered.
        settings: The RenderSettings in effect.
        buffers: Device-side copy of the scene.
    """

    def __init__(self, scene: Scene, settings: RenderSettings | None = None) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            settings: Camera and tone mapping settings. Defaults to
                RenderSettings().
        """
        self.scene = scene
        self.settings = settings if settings is not None else RenderSettings()
        self.buffers = SceneBuffers(scene)
        self._width = scene.width
        self._height = scene.height
        self._color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(self._width, self._height))
        self._rows_done = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def rows_done(self) -> int:
        """Get the number of rows rendered so far."""
        return self._rows_done

    @property
    def is_complete(self) -> bool:
        """Whether every row of the frame has been rendered."""
        return self._rows_done >= self._height

    @ti.kernel
    def _render_rows(self, y_start: ti.i32, y_end: ti.i32, exposure: ti.f32, camera_z: ti.f32):
        """Render rows [y_start, y_end) into the color buffer."""
        for x, y in ti.ndrange(self._width, (y_start, y_end)):
            self._color_buffer[x, y] = sample_pixel(self.buffers, x, y, exposure, camera_z)

    def reset(self) -> None:
        """Clear the color buffer so the next render starts from row 0."""
        self._color_buffer.fill(0.0)
        self._rows_done = 0

    def render(
        self,
        rows_per_batch: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render the whole frame.

        Args:
            rows_per_batch: Number of rows per kernel launch. None renders the
                frame in one launch.
            callback: Optional callback invoked after each batch with
                (rows_done, total_rows).

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> renderer.render(rows_per_batch=60, callback=progress)
        """
        for done, total in self.render_progressive(rows_per_batch):
            if callback is not None:
                callback(done, total)

    def render_progressive(
        self,
        rows_per_batch: int | None = None,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the frame, yielding progress after each batch of rows.

        Args:
            rows_per_batch: Number of rows per kernel launch. None renders the
                frame in one launch.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            ValueError: If rows_per_batch is not positive.
        """
        if rows_per_batch is None:
            rows_per_batch = self._height
        if rows_per_batch <= 0:
            raise ValueError(f"rows_per_batch must be positive, got {rows_per_batch}")

        self.reset()
        logger.info(
            "Tracing %dx%d image (exposure=%g, camera_z=%g)",
            self._width,
            self._height,
            self.settings.exposure,
            self.settings.camera_z,
        )
        start_time = time.perf_counter()

        while self._rows_done < self._height:
            y_end = min(self._rows_done + rows_per_batch, self._height)
            self._render_rows(self._rows_done, y_end, self.settings.exposure, self.settings.camera_z)
            self._rows_done = y_end
            logger.debug("Rendered %d/%d rows", self._rows_done, self._height)
            yield (self._rows_done, self._height)

        logger.info("Trace complete in %.2fs", time.perf_counter() - start_time)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered image as a NumPy array.

        The color buffer is indexed (x, y) with y = 0 at the bottom. The
        returned array is in the usual image layout: shape (height, width, 3)
        with the top row first. Values are sRGB-encoded but not clamped.

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.
        """
        image = self._color_buffer.to_numpy()

        # Transpose from (width, height, 3) to (height, width, 3)
        image = np.transpose(image, (1, 0, 2))

        # Flip vertically (row 0 of the buffer is the bottom of the image)
        image = np.flipud(image)

        return np.ascontiguousarray(image, dtype=np.float32)

    def save_bmp(self, filepath: str | Path) -> Path:
        """Save the rendered image as a 24-bit BMP file.

        Renders the frame first if it has not been fully rendered yet.

        Args:
            filepath: Output file path.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        if not self.is_complete:
            self.render()
        return save_bmp(self.get_image_numpy(), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"spheres={self.buffers.sphere_count}, lights={self.buffers.light_count})"
        )
