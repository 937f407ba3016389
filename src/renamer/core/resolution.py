"""Resolution prober for media files.

Resolves pixel dimensions for images and videos so the transform pipeline can
tag names with ``WxH``.

- Images Pillow can read are opened lazily: ``Image.open`` parses only the
  header, pixel data is never decoded.
- Videos and image formats without a Pillow decoder go through ``ffprobe``,
  asking for the first video stream's width/height as JSON.
- Any failure degrades to ``ProbeResult(0, 0)``; probing never raises.

Whether ffprobe exists is checked once per run by the caller
(:func:`is_ffprobe_available`), not per file.
"""

import json
import logging
import subprocess
from math import gcd
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from renamer.errors import ProbeUnavailableError
from renamer.models.core import DirEntry, MediaKind, ProbeResult
from renamer.utils.config import DEFAULT_FFPROBE, DEFAULT_PROBE_TIMEOUT

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = {
    ".mp4",
    ".mov",
    ".avi",
    ".mkv",
    ".webm",
    ".m4v",
    ".3gp",
    ".flv",
    ".wmv",
    ".mpg",
    ".mpeg",
    ".m2v",
    ".mts",
    ".m2ts",
}

# Decoded in-process from the file header.
NATIVE_IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".tif",
    ".tiff",
}

# Images handed to ffprobe: Pillow support for these depends on optional codecs.
PROBE_IMAGE_EXTENSIONS = {
    ".heic",
    ".heif",
    ".webp",
    ".avif",
}


def classify_extension(extension: str) -> MediaKind:
    """Classify a file extension (with leading dot, any case)."""
    ext = extension.lower()
    if ext in NATIVE_IMAGE_EXTENSIONS:
        return MediaKind.NATIVE_IMAGE
    if ext in PROBE_IMAGE_EXTENSIONS:
        return MediaKind.PROBE_IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    return MediaKind.OTHER


def reduce_aspect_ratio(width: int, height: int) -> Tuple[int, int]:
    """Reduce ``width:height`` by their greatest common divisor.

    ``reduce_aspect_ratio(1920, 1080) == (16, 9)``. Returns ``(0, 0)`` when
    either side is not positive.
    """
    if width <= 0 or height <= 0:
        return 0, 0
    divisor = gcd(width, height)
    return width // divisor, height // divisor


def format_resolution(result: ProbeResult, separator: str, aspect_ratio: bool) -> str:
    """Format dimensions as ``WxH``, optionally followed by the reduced ratio.

    The ratio segment is only added when it differs from ``WxH`` itself.
    Returns ``""`` for unknown dimensions.
    """
    if not result.known:
        return ""
    text = f"{result.width}x{result.height}"
    if aspect_ratio:
        ratio_w, ratio_h = reduce_aspect_ratio(result.width, result.height)
        ratio = f"{ratio_w}x{ratio_h}"
        if ratio != text:
            text = f"{text}{separator}{ratio}"
    return text


def is_ffprobe_available(ffprobe: str = DEFAULT_FFPROBE) -> bool:
    """Return True if ``ffprobe -version`` runs successfully."""
    try:
        subprocess.run(
            [ffprobe, "-version"],
            capture_output=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("%s is not available: %s", ffprobe, e)
        return False
    return True


def get_image_resolution(path: Path) -> ProbeResult:
    """Read image dimensions from the file header with Pillow."""
    try:
        with Image.open(path) as image:
            width, height = image.size
    except (
        OSError,
        UnidentifiedImageError,
        Image.DecompressionBombError,
        ValueError,
    ) as e:
        logger.debug("Failed to read image header %s: %s", path, e)
        return ProbeResult.unknown()
    return ProbeResult(width, height)


def parse_ffprobe_output(output: Union[str, bytes]) -> ProbeResult:
    """Extract the first stream's dimensions from ffprobe JSON output.

    Malformed output or an empty ``streams`` array yields ``(0, 0)``.
    """
    try:
        data = json.loads(output)
        stream = data["streams"][0]
        return ProbeResult(int(stream.get("width", 0)), int(stream.get("height", 0)))
    except (ValueError, KeyError, IndexError, TypeError, AttributeError):
        return ProbeResult.unknown()


class ResolutionProber:
    """Resolves media dimensions, dispatching on file extension."""

    def __init__(
        self,
        ffprobe: str = DEFAULT_FFPROBE,
        timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self.ffprobe = ffprobe
        self.timeout = timeout

    def is_available(self) -> bool:
        return is_ffprobe_available(self.ffprobe)

    def require(self) -> None:
        """Fail fast when ffprobe cannot be run.

        Raises:
            ProbeUnavailableError: If ``ffprobe -version`` fails.
        """
        if not self.is_available():
            raise ProbeUnavailableError(self.ffprobe)

    def probe_with_ffprobe(self, path: Path) -> ProbeResult:
        """Ask ffprobe for the first video stream's width and height."""
        cmd = [
            self.ffprobe,
            "-v",
            "error",
            "-select_streams",
            "v:0",
            "-show_entries",
            "stream=width,height",
            "-of",
            "json",
            str(path),
        ]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("ffprobe failed for %s: %s", path, e)
            return ProbeResult.unknown()
        return parse_ffprobe_output(result.stdout)

    def resolve(self, entry: DirEntry, directory: Path) -> ProbeResult:
        """Return the dimensions of *entry*, or ``(0, 0)`` if unknown.

        Args:
            entry: The directory entry to inspect.
            directory: Directory containing the entry.
        """
        kind = classify_extension(entry.extension)
        if kind is MediaKind.OTHER:
            return ProbeResult.unknown()

        path = directory / entry.name
        if kind is MediaKind.NATIVE_IMAGE:
            return get_image_resolution(path)
        return self.probe_with_ffprobe(path)
