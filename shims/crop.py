# ============================================================================
# CROP SHIM
# ============================================================================
# STATUS: Shim - Image crop
# PURPOSE: Centered percentage crop of an image on disk
# CREATED: 19 OCT 2026
# ============================================================================
"""
Crop Shim

Crops the centre of an image, keeping `scale` percent of each side.

Params:
    in: Source image path (must exist and be readable); relative paths
        are taken from the image root, and no path may leave it
    out: Destination path inside the image root (defaults to
        overwriting the source)
    scale: Percentage of width/height to keep, 0 < scale <= 100
    image_library, quality, create_thumb, maintain_ratio: Passed to the
        image library (defaults from ImageDefaults)

Output (success data):
    path: Path the cropped image was written to

Template tag:
    {exp:eeshim:crop in="images/raw.jpg" out="images/cropped.jpg" scale="50"}

From Python:
    shim = resolve("crop", {"in": "images/raw.jpg", "out": "images/cropped.jpg", "scale": 50})
    shim.execute()
    if not shim.has_errors():
        data = shim.get_success_data()
    else:
        errors = shim.get_errors()
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from core.config import get_defaults
from core.imaging import (
    ImageCropConfig,
    ImageLibrary,
    read_image_size,
    resolve_within_root,
)
from shims.base import Shim
from shims.registry import register_shim

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropRegion:
    """Pixel region to keep."""
    width: int
    height: int
    x_offset: int
    y_offset: int


def centered_crop_region(width: int, height: int, scale: float) -> CropRegion:
    """
    Region covering `scale` percent of each side, centred in the image.

    Example:
        centered_crop_region(200, 100, 50) -> CropRegion(100, 50, 50, 25)
    """
    margin = ((100 - scale) / 2) / 100
    return CropRegion(
        width=math.floor(width * (scale / 100)),
        height=math.floor(height * (scale / 100)),
        x_offset=math.floor(margin * width),
        y_offset=math.floor(margin * height),
    )


def _parse_scale(value: Any) -> Optional[float]:
    try:
        scale = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(scale) or not 0 < scale <= 100:
        return None
    return scale


def _validation_messages(error: ValidationError):
    return [
        f"{'.'.join(str(loc) for loc in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    ]


@register_shim
class Crop(Shim):
    """Centered percentage crop of an image file."""

    name = "crop"
    defaults = get_defaults().image.as_shim_params()

    image_library_class = ImageLibrary

    def run(self):
        source = self.get_param("in")
        out = self.get_param("out")

        if not source:
            return self.fail(f"Cannot read source image: {source}")

        source_path = resolve_within_root(str(source))
        if source_path is None:
            return self.fail(f"Source image is outside the image root: {source}")

        dest_path = None
        if out:
            dest_path = resolve_within_root(str(out))
            if dest_path is None:
                return self.fail(f"Destination image is outside the image root: {out}")

        if not source_path.is_file() or not os.access(source_path, os.R_OK):
            return self.fail(f"Cannot read source image: {source}")

        size = read_image_size(str(source_path))
        if size is None:
            return self.fail("Could not get image dimensions")

        scale = _parse_scale(self.get_param("scale"))
        if scale is None:
            return self.fail(
                f"Invalid scale: {self.get_param('scale')!r} (expected a percentage in (0, 100])"
            )

        region = centered_crop_region(size[0], size[1], scale)
        logger.debug(f"Crop region for {source} at {scale}%: {region}")

        try:
            config = ImageCropConfig(
                library=self.get_param("image_library"),
                quality=self.get_param("quality"),
                source_path=str(source_path),
                dest_path=str(dest_path) if dest_path is not None else None,
                create_thumbnail=self.get_param("create_thumb", False),
                maintain_ratio=self.get_param("maintain_ratio", False),
                width=region.width,
                height=region.height,
                x_offset=region.x_offset,
                y_offset=region.y_offset,
            )
        except ValidationError as e:
            return self.fail(_validation_messages(e))

        library = self.image_library_class()
        errors = library.crop(config)

        if errors:
            return self.fail(errors)
        return self.success({"path": str(library.destination_for(config))})


__all__ = [
    "Crop",
    "CropRegion",
    "centered_crop_region",
]
