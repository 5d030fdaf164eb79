"""Unified CLI for string-art.

All commands are registered on a single ``typer.Typer`` app and exposed
via the ``string-art`` console entry-point.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

app = typer.Typer(
    name="string-art",
    help="Turn an image into a pin-by-pin stringing sequence for a rectangular frame.",
    add_completion=False,
    no_args_is_help=True,
)

# ---------------------------------------------------------------------------
# Shared option types
# ---------------------------------------------------------------------------

WidthOpt = Annotated[Optional[float], typer.Option(help="Frame width in --unit.")]
HeightOpt = Annotated[Optional[float], typer.Option(help="Frame height in --unit.")]
UnitOpt = Annotated[Optional[str], typer.Option(help="Frame unit: cm / in.")]
SpacingOpt = Annotated[
    Optional[float], typer.Option(help="Pin spacing in millimetres (5-30).")
]
SettingsOpt = Annotated[
    Optional[Path], typer.Option(help="JSON settings file (default: ./string_art.json).")
]


@app.callback()
def _main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress details.")
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _require_path(path: Path, label: str, hint: str = "") -> None:
    """Abort with a clear message when *path* is missing."""
    if not path.exists():
        msg = f"{label} not found at {path}."
        if hint:
            msg += f" {hint}"
        raise typer.BadParameter(msg)


def _frame_from(
    settings: Optional[Path],
    width: Optional[float],
    height: Optional[float],
    unit: Optional[str],
    pin_spacing: Optional[float],
):
    """Build a FrameSpec from CLI options, falling back to saved defaults."""
    from .config import load_defaults
    from .errors import InvalidConfigurationError
    from .frame import FrameSpec

    try:
        defaults = load_defaults(settings)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Settings file is not valid JSON: {e}") from e
    try:
        frame = FrameSpec(
            width=width if width is not None else float(defaults["width"]),
            height=height if height is not None else float(defaults["height"]),
            unit=unit or str(defaults["unit"]),
            pin_spacing_mm=(
                pin_spacing
                if pin_spacing is not None
                else float(defaults["pin_spacing_mm"])
            ),
        )
    except InvalidConfigurationError as e:
        raise typer.BadParameter(str(e)) from e
    return frame, defaults


# ── Frame geometry ────────────────────────────────────────────────────────


@app.command()
def frame(
    width: WidthOpt = None,
    height: HeightOpt = None,
    unit: UnitOpt = None,
    pin_spacing: SpacingOpt = None,
    settings: SettingsOpt = None,
) -> None:
    """Print pin count, spacing and edge breakdown for a frame."""
    spec, _ = _frame_from(settings, width, height, unit, pin_spacing)
    low, high = spec.pin_count_range
    per_width, per_height = spec.pins_per_edge
    quality = spec.quality

    print(f"Canvas:       {spec.describe()}")
    print(f"Perimeter:    {spec.perimeter_mm / 10:.1f}cm / {spec.perimeter_mm / 25.4:.1f}\"")
    print(f"Pins:         {spec.pin_count}  (range {low}-{high}, recommended {spec.recommended_pin_count})")
    print(f"Spacing:      {spec.actual_spacing_mm:.1f}mm  [{quality.label}: {quality.description}]")
    print(f"Per edge:     top/bottom ~{per_width}, left/right ~{per_height}")


@app.command()
def pins(
    width: WidthOpt = None,
    height: HeightOpt = None,
    unit: UnitOpt = None,
    pin_spacing: SpacingOpt = None,
    settings: SettingsOpt = None,
) -> None:
    """List pin coordinates on the working canvas."""
    from .pins import generate_pins

    spec, _ = _frame_from(settings, width, height, unit, pin_spacing)
    canvas_w, canvas_h = spec.canvas_size()
    layout = generate_pins(canvas_w, canvas_h, spec.pin_count)

    print(f"{len(layout)} pins on a {canvas_w}x{canvas_h} canvas\n")
    print(f"{'Pin':>5}  {'X':>8}  {'Y':>8}")
    for pin in layout:
        print(f"{pin.index:>5}  {pin.x:>8.2f}  {pin.y:>8.2f}")


# ── Generation ────────────────────────────────────────────────────────────


@app.command()
def generate(
    image: Annotated[Path, typer.Argument(help="Path to the source image.")],
    width: WidthOpt = None,
    height: HeightOpt = None,
    unit: UnitOpt = None,
    pin_spacing: SpacingOpt = None,
    strings: Annotated[
        Optional[int], typer.Option(help="Number of string connections.")
    ] = None,
    min_gap_fraction: Annotated[
        Optional[float],
        typer.Option(help="Minimum connection span as a fraction of the pin count."),
    ] = None,
    stroke_darkness: Annotated[
        Optional[float],
        typer.Option(help="Darkness (0-255) one string removes from each pixel."),
    ] = None,
    output: Annotated[Path, typer.Option(help="Output directory.")] = Path(
        "string_art_output"
    ),
    overlay: Annotated[
        bool, typer.Option(help="Also write the printable nail overlay.")
    ] = True,
    preview: Annotated[
        bool, typer.Option(help="Also write a rendered preview.")
    ] = True,
    settings: SettingsOpt = None,
) -> None:
    """Generate a stringing sequence and write instructions, overlay and preview."""
    import cv2

    from .errors import InvalidConfigurationError
    from .export import format_instructions, render_nail_overlay, render_preview
    from .pipeline import generate_from_image

    _require_path(image, "Image")
    spec, defaults = _frame_from(settings, width, height, unit, pin_spacing)
    strings = strings if strings is not None else int(defaults["strings"])
    min_gap_fraction = (
        min_gap_fraction
        if min_gap_fraction is not None
        else float(defaults["min_gap_fraction"])
    )
    stroke_darkness = (
        stroke_darkness
        if stroke_darkness is not None
        else float(defaults["stroke_darkness"])
    )

    print(f"Frame: {spec.describe()}  |  {spec.pin_count} pins @ {spec.actual_spacing_mm:.1f}mm")
    print(f"Strings: {strings}  |  Min gap: {min_gap_fraction:.0%}  |  Stroke: {stroke_darkness:g}")

    with typer.progressbar(length=100, label="Stringing") as bar:
        done = 0

        def _advance(progress) -> None:
            nonlocal done
            bar.update(progress.percent - done)
            done = progress.percent

        try:
            result = generate_from_image(
                image,
                spec,
                strings,
                min_pin_gap_fraction=min_gap_fraction,
                stroke_darkness=stroke_darkness,
                on_progress=_advance,
                progress_interval=int(defaults["progress_interval"]),
            )
        except (FileNotFoundError, InvalidConfigurationError) as e:
            raise typer.BadParameter(str(e)) from e

    path = result.path
    print(f"\nBuilt {len(path)}/{path.requested} connections ({path.stop_reason})")

    output.mkdir(parents=True, exist_ok=True)
    instructions_path = output / "string-art-instructions.txt"
    instructions_path.write_text(format_instructions(path, spec), encoding="utf-8")
    print(f"Instructions → {instructions_path}")

    if overlay:
        overlay_path = output / "nail-overlay.png"
        cv2.imwrite(str(overlay_path), render_nail_overlay(spec, result.canvas_size))
        print(f"Nail overlay → {overlay_path}")

    if preview:
        preview_path = output / "preview.png"
        cv2.imwrite(
            str(preview_path),
            render_preview(
                path,
                result.pins,
                result.canvas_size,
                opacity=float(defaults["line_opacity"]),
                string_color=str(defaults["string_color"]),
                background_color=str(defaults["background_color"]),
            ),
        )
        print(f"Preview → {preview_path}")
