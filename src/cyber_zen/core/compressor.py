"""Batch image compression over a file or a directory tree."""

import os
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from cyber_zen.core.errors import CompressionError, UserInputError
from cyber_zen.core.imaging import (
    decode_image,
    encode_image,
    is_reencodable,
    resize_nearest,
    target_size,
    validate_rate,
)
from cyber_zen.models.compression import (
    BatchSummary,
    CompressionAction,
    CompressionResult,
)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
TIMESTAMP_PATTERN = re.compile(r"_\d{8}_\d{6}$")
DEFAULT_DIST_PREFIX = "compressed"

ResultCallback = Callable[[CompressionResult], None]


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def format_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def contains_timestamp(path: Path) -> bool:
    """Check whether the final path component ends in _YYYYMMDD_HHMMSS."""
    return bool(TIMESTAMP_PATTERN.search(Path(path).name))


def add_timestamp_to_path(path: Path, timestamp: str) -> Path:
    """Append the timestamp to the stem of a file or the name of a directory."""
    path = Path(path)
    if path.suffix:
        return path.with_name(f"{path.stem}_{timestamp}{path.suffix}")
    return path.with_name(f"{path.name}_{timestamp}")


def compress_image_file(src: Path, dst: Path, rate: float) -> CompressionResult:
    """Resize and re-encode one image, copying it verbatim when undecodable."""
    try:
        data = src.read_bytes()
    except OSError as e:
        raise CompressionError(f"Failed to read {src}: {e}") from e

    dst.parent.mkdir(parents=True, exist_ok=True)

    try:
        image = decode_image(data)
    except CompressionError as e:
        logger.warning(f"Cannot decode {src.name}, copying original bytes: {e}")
        dst.write_bytes(data)
        return CompressionResult(
            source=src,
            destination=dst,
            action=CompressionAction.COPIED,
            original_bytes=len(data),
            compressed_bytes=len(data),
        )

    with image:
        original_size = image.size
        image_format = image.format

        if not is_reencodable(image_format):
            logger.warning(f"Format {image_format} is not re-encoded, copying {src.name}")
            dst.write_bytes(data)
            return CompressionResult(
                source=src,
                destination=dst,
                action=CompressionAction.COPIED,
                format=image_format,
                original_size=original_size,
                new_size=original_size,
                original_bytes=len(data),
                compressed_bytes=len(data),
            )

        new_size = target_size(*original_size, rate)
        resized = resize_nearest(image, *new_size)
        try:
            encoded = encode_image(resized, image_format, rate)
        except (OSError, ValueError) as e:
            raise CompressionError(f"Failed to encode {src.name}: {e}") from e

    try:
        dst.write_bytes(encoded)
    except OSError as e:
        raise CompressionError(f"Failed to write {dst}: {e}") from e

    logger.debug(
        f"{src.name}: {original_size[0]}x{original_size[1]} -> "
        f"{new_size[0]}x{new_size[1]}, {len(data)} -> {len(encoded)} bytes"
    )
    return CompressionResult(
        source=src,
        destination=dst,
        action=CompressionAction.ENCODED,
        format=image_format,
        original_size=original_size,
        new_size=new_size,
        original_bytes=len(data),
        compressed_bytes=len(encoded),
    )


def _is_within(path: Path, parent: Path) -> bool:
    resolved = path.resolve()
    return resolved == parent or parent in resolved.parents


def compress_directory(
    src_dir: Path,
    dst_dir: Path,
    rate: float,
    on_result: Optional[ResultCallback] = None,
) -> BatchSummary:
    """Compress every image below src_dir into the same layout under dst_dir.

    Non-image files are skipped. A file that fails is recorded and the walk
    carries on.
    """
    dst_dir.mkdir(parents=True, exist_ok=True)
    summary = BatchSummary(destination=dst_dir)
    output_root = dst_dir.resolve()

    for root, dirs, files in os.walk(src_dir):
        # never descend into our own output when it lives below src_dir
        dirs[:] = sorted(d for d in dirs if not _is_within(Path(root) / d, output_root))
        for name in sorted(files):
            path = Path(root) / name
            if not is_image_file(path):
                continue

            relative = path.relative_to(src_dir)
            try:
                result = compress_image_file(path, dst_dir / relative, rate)
            except CompressionError as e:
                logger.error(f"Compression failed: {relative} - {e}")
                result = CompressionResult(
                    source=path,
                    destination=dst_dir / relative,
                    action=CompressionAction.FAILED,
                    error=str(e),
                )

            summary.results.append(result)
            if on_result is not None:
                on_result(result)

    return summary


def resolve_destination(
    src: Path, dist: Optional[Path], now: Optional[datetime] = None
) -> Path:
    """Work out where output goes, appending a timestamp when missing.

    For a single source file and a destination without an extension the
    destination is treated as a directory and the output file is named
    after the source with the timestamp added.
    """
    timestamp = format_timestamp(now)
    if dist is None:
        dist = Path(f"{DEFAULT_DIST_PREFIX}_{timestamp}")
    dist = Path(dist).absolute()

    if not contains_timestamp(dist):
        dist = add_timestamp_to_path(dist, timestamp)

    if src.is_file() and not dist.suffix:
        dist = dist / f"{src.stem}_{timestamp}{src.suffix}"
    return dist


def compress(
    src: Path,
    dist: Optional[Path] = None,
    rate: float = 0.8,
    now: Optional[datetime] = None,
    on_result: Optional[ResultCallback] = None,
) -> BatchSummary:
    """Compress a file or directory into a timestamped destination."""
    validate_rate(rate)

    src = Path(src).absolute()
    if not src.exists():
        raise UserInputError(f"Source path does not exist: {src}")

    destination = resolve_destination(src, dist, now)
    logger.info(f"Compressing {src} -> {destination} at rate {rate:.2f}")

    if src.is_dir():
        return compress_directory(src, destination, rate, on_result)

    if not is_image_file(src):
        raise UserInputError(f"Unsupported file format: {src.suffix or src.name}")

    result = compress_image_file(src, destination, rate)
    if on_result is not None:
        on_result(result)
    return BatchSummary(destination=destination, results=[result])
