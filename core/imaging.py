# ============================================================================
# IMAGE LIBRARY ADAPTER
# ============================================================================
# STATUS: Core - Image processing collaborator
# PURPOSE: Crop images on disk via Pillow, reporting errors as a list
# CREATED: 19 OCT 2026
# ============================================================================
"""
Image Library Adapter

Thin wrapper over Pillow used by the crop shim. The adapter never raises
for image problems: every operation returns a list of error strings,
empty on success.

Usage:
    config = ImageCropConfig(
        source_path="images/raw.jpg",
        dest_path="images/cropped.jpg",
        width=100, height=50, x_offset=50, y_offset=25,
    )
    errors = ImageLibrary().crop(config)
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image
from pydantic import BaseModel, Field

from core.config import get_defaults

logger = logging.getLogger(__name__)

# Formats whose encoders take a quality setting
_QUALITY_FORMATS = ("JPEG", "WEBP")


class ImageCropConfig(BaseModel):
    """Everything the adapter needs for one crop."""
    library: str = "GD2"
    quality: int = Field(default=80, ge=1, le=100)
    source_path: str = Field(..., min_length=1)
    dest_path: Optional[str] = None
    create_thumbnail: bool = False
    maintain_ratio: bool = True
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    x_offset: int = Field(default=0, ge=0)
    y_offset: int = Field(default=0, ge=0)


def read_image_size(path: str) -> Optional[Tuple[int, int]]:
    """
    Read pixel dimensions of an image file.

    Returns:
        (width, height), or None if the file is not a readable image
    """
    try:
        with Image.open(path) as img:
            width, height = img.size
    except (OSError, ValueError) as e:
        logger.debug(f"Could not read image size for {path}: {e}")
        return None

    if not width or not height:
        return None
    return width, height


def resolve_within_root(path: str, root: Optional[str] = None) -> Optional[Path]:
    """
    Resolve an image path against the image root.

    Relative paths are taken relative to the root; symlinks are followed.

    Returns:
        The absolute path, or None if it lies outside the root
    """
    root_path = Path(root if root is not None else get_defaults().image.root).resolve()
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root_path / candidate
    candidate = candidate.resolve()

    if candidate == root_path or root_path in candidate.parents:
        return candidate
    return None


def fit_to_ratio(
    source_size: Tuple[int, int],
    width: int,
    height: int,
) -> Tuple[int, int]:
    """
    Shrink (width, height) so it matches the source aspect ratio.

    The side that overshoots the source ratio is reduced; neither side
    grows.
    """
    source_width, source_height = source_size
    ratio_height = round(width * source_height / source_width)
    if ratio_height <= height:
        return width, max(ratio_height, 1)
    ratio_width = round(height * source_width / source_height)
    return max(ratio_width, 1), height


class ImageLibrary:
    """
    Pillow-backed image library.

    Library names in ImageDefaults.supported_libraries are all served by
    Pillow; any other name is rejected.
    """

    def __init__(
        self,
        thumb_marker: Optional[str] = None,
        supported_libraries: Optional[Sequence[str]] = None,
    ):
        image_defaults = get_defaults().image
        self.thumb_marker = (
            thumb_marker if thumb_marker is not None else image_defaults.thumb_marker
        )
        self.supported_libraries = tuple(
            name.lower()
            for name in (supported_libraries or image_defaults.supported_libraries)
        )

    def destination_for(self, config: ImageCropConfig) -> Path:
        """
        Path the crop will be written to.

        No dest_path means the source is overwritten; create_thumbnail
        inserts the thumbnail marker before the suffix.
        """
        dest = Path(config.dest_path or config.source_path)
        if config.create_thumbnail:
            dest = dest.with_name(f"{dest.stem}{self.thumb_marker}{dest.suffix}")
        return dest

    def crop(self, config: ImageCropConfig) -> List[str]:
        """
        Crop the source image and write the result.

        Returns:
            List of error messages (empty on success)
        """
        if config.library.lower() not in self.supported_libraries:
            return [f"Unsupported image library: {config.library}"]

        dest = self.destination_for(config)
        if not dest.parent.is_dir():
            return [f"Destination directory does not exist: {dest.parent}"]

        try:
            with Image.open(config.source_path) as img:
                img.load()
                width, height = config.width, config.height
                if config.maintain_ratio:
                    width, height = fit_to_ratio(img.size, width, height)

                right = config.x_offset + width
                lower = config.y_offset + height
                if right > img.width or lower > img.height:
                    return [
                        f"Crop region {width}x{height}+{config.x_offset}+{config.y_offset} "
                        f"exceeds image bounds {img.width}x{img.height}"
                    ]

                cropped = img.crop((config.x_offset, config.y_offset, right, lower))
                image_format = Image.registered_extensions().get(dest.suffix.lower())
                if image_format is None:
                    return [f"Unsupported output format: {dest.name}"]

                save_kwargs = {}
                if image_format in _QUALITY_FORMATS:
                    save_kwargs["quality"] = config.quality
                if image_format == "JPEG" and cropped.mode not in ("RGB", "L"):
                    cropped = cropped.convert("RGB")

                cropped.save(dest, format=image_format, **save_kwargs)
        except (OSError, ValueError) as e:
            logger.warning(f"Image crop failed for {config.source_path}: {e}")
            return [f"Image processing failed: {e}"]

        logger.info(
            f"Cropped {config.source_path} -> {dest} ({width}x{height} "
            f"at {config.x_offset},{config.y_offset})"
        )
        return []


__all__ = [
    "ImageCropConfig",
    "ImageLibrary",
    "read_image_size",
    "resolve_within_root",
    "fit_to_ratio",
]
