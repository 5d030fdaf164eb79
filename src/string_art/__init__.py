from string_art.builder import (
    BuildProgress,
    Connection,
    StringPath,
    build,
    build_path,
)
from string_art.cache import LineCache
from string_art.errors import InvalidConfigurationError
from string_art.field import DarknessField
from string_art.frame import FrameSpec, spacing_quality
from string_art.pins import Pin, PinLayoutCache, circular_distance, generate_pins
from string_art.pipeline import GenerationResult, generate_from_image
from string_art.raster import rasterize_line
from string_art.worker import BuildWorker

__all__ = [
    "BuildProgress",
    "BuildWorker",
    "Connection",
    "DarknessField",
    "FrameSpec",
    "GenerationResult",
    "InvalidConfigurationError",
    "LineCache",
    "Pin",
    "PinLayoutCache",
    "StringPath",
    "build",
    "build_path",
    "circular_distance",
    "generate_from_image",
    "generate_pins",
    "main",
    "rasterize_line",
    "spacing_quality",
]


def main() -> None:
    """CLI entry point."""
    from string_art.cli import app

    app()
