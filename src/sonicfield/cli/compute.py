"""Command-line tool for SPL field computation.

The sonicfield CLI evaluates a loudspeaker deployment in a rectangular room:

    sonicfield speakers                  list the built-in catalog
    sonicfield analyze --speaker ID      eager coverage metrics
    sonicfield field --speaker ID        full plane sampling with progress,
                                         optionally saved to HDF5

Trim height and tilt default to the rule-of-thumb suggestions for the room.
"""

import sys
import time
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from sonicfield import __version__
from sonicfield.analysis.coverage import (
    CoverageAnalysis,
    analyze_coverage,
    coverage_from_field,
    suggest_tilt,
    suggest_trim_height,
)
from sonicfield.io.hdf5 import FieldResultWriter
from sonicfield.sampling.plane import SamplingPlane
from sonicfield.sampling.scheduler import FieldRequest, SamplerSettings, run_to_completion
from sonicfield.sources.base import (
    ROOM_PRESETS,
    AcousticSourceProfile,
    CenterFillConfig,
    DeploymentConfiguration,
    DeploymentMode,
    RoomDimensions,
    SourceType,
)
from sonicfield.sources.library import get_profile, list_profiles

from .progress import SamplingProgress, format_time, print_field_info

console = Console()

PLANE_CHOICES = {"top": "top_down", "side": "side_elevation"}


def deployment_options(func):
    """Room and deployment options shared by ``analyze`` and ``field``."""
    options = [
        click.option("--speaker", "-s", required=True, help="Catalog id of the main loudspeaker"),
        click.option(
            "--preset",
            type=click.Choice(list(ROOM_PRESETS)),
            help="Room preset (explicit dimensions override it)",
        ),
        click.option("--width", type=float, help="Room width in meters"),
        click.option("--depth", type=float, help="Stage to back wall in meters"),
        click.option("--height", type=float, help="Ceiling height in meters"),
        click.option("--quantity", "-q", type=int, default=1, show_default=True,
                     help="Elements per array (per side in stereo)"),
        click.option("--trim", type=float, help="Trim height in meters (default: suggested)"),
        click.option("--tilt", type=float, help="Downward tilt in degrees (default: suggested)"),
        click.option("--aim", type=float, default=0.0, show_default=True,
                     help="Horizontal aim in degrees"),
        click.option("--mode", type=click.Choice(["single", "stereo"]), default="single",
                     show_default=True, help="Single center source or stereo L/R pair"),
        click.option("--spread", type=float, default=0.0, show_default=True,
                     help="Distance between stereo sources in meters"),
        click.option("--center-fill", "center_fill", help="Catalog id of a center-fill speaker"),
        click.option("--center-fill-gain", type=click.FloatRange(-12.0, 6.0), default=0.0,
                     show_default=True, help="Center-fill gain in dB"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_room(
    preset: str | None, width: float | None, depth: float | None, height: float | None
) -> RoomDimensions:
    room = RoomDimensions.from_preset(preset) if preset else RoomDimensions()
    overrides = {
        name: value
        for name, value in (("width", width), ("depth", depth), ("height", height))
        if value is not None
    }
    return replace(room, **overrides)


def build_deployment(
    room: RoomDimensions,
    profile: AcousticSourceProfile,
    *,
    quantity: int,
    trim: float | None,
    tilt: float | None,
    aim: float,
    mode: str,
    spread: float,
    center_fill: str | None,
    center_fill_gain: float,
) -> DeploymentConfiguration:
    trim_height = suggest_trim_height(room) if trim is None else trim
    tilt_angle = suggest_tilt(room, trim_height) if tilt is None else tilt
    return DeploymentConfiguration(
        speaker_id=profile.id,
        quantity=quantity,
        trim_height=trim_height,
        tilt_angle=tilt_angle,
        horizontal_aim=aim,
        deployment_mode=(
            DeploymentMode.STEREO_LR if mode == "stereo" else DeploymentMode.SINGLE_CENTER
        ),
        array_spread=spread,
        center_fill=CenterFillConfig(
            enabled=center_fill is not None,
            profile_id=center_fill or "",
            gain_db=center_fill_gain,
        ),
    )


def resolve_inputs(speaker: str, preset, width, depth, height, center_fill, **deployment_kwargs):
    """Resolve CLI options into engine inputs.

    Returns:
        (room, profile, deployment, center_fill_profile); profile and
        deployment are None when the speaker id is unknown
    """
    room = build_room(preset, width, depth, height)
    profile = get_profile(speaker)
    if profile is None:
        return room, None, None, None

    center_fill_profile = get_profile(center_fill)
    if center_fill and center_fill_profile is None:
        console.print(
            f"[yellow]Warning:[/yellow] Center-fill speaker '{center_fill}' not found, ignoring"
        )
    deployment = build_deployment(room, profile, center_fill=center_fill, **deployment_kwargs)
    return room, profile, deployment, center_fill_profile


def print_analysis(analysis: CoverageAnalysis):
    table = Table(title="Coverage", show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Center stage", f"{analysis.center_stage_spl:.1f} dB")
    table.add_row("Front row", f"{analysis.front_row_spl:.1f} dB")
    table.add_row("Back row", f"{analysis.back_row_spl:.1f} dB")
    table.add_row("Front to back", f"{analysis.front_to_back_ratio:+.1f} dB")
    table.add_row("Coverage", f"{analysis.coverage_percentage:.0f}%")
    reflection = (
        "[yellow]yes[/yellow]" if analysis.has_ceiling_reflection else "[green]no[/green]"
    )
    table.add_row("Ceiling reflection", reflection)
    console.print(table)


def _no_source(speaker: str):
    console.print(f"[yellow]No source selected:[/yellow] speaker '{speaker}' not in catalog")
    console.print("[dim]Run 'sonicfield speakers' to list available models[/dim]")


@click.group()
@click.version_option(version=__version__, prog_name="sonicfield")
def main():
    """SPL field computation for loudspeaker deployments."""


@main.command()
@click.option(
    "--type",
    "source_type",
    type=click.Choice([t.value for t in SourceType]),
    help="Only list one family",
)
def speakers(source_type: str | None):
    """List the built-in loudspeaker catalog."""
    profiles = list_profiles(SourceType(source_type) if source_type else None)

    table = Table(title="Speakers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Model")
    table.add_column("Type")
    table.add_column("Max SPL", justify="right")
    table.add_column("H × V", justify="right")
    table.add_column("Array", justify="right")
    for profile in profiles:
        table.add_row(
            profile.id,
            profile.display_name,
            profile.type.value,
            f"{profile.max_spl:.0f} dB",
            f"{profile.horz_dispersion:g}° × {profile.vert_dispersion:g}°",
            str(profile.max_array_size) if profile.arrayable else "-",
        )
    console.print(table)


@main.command()
@deployment_options
def analyze(speaker: str, **options):
    """Print coverage metrics for a deployment."""
    try:
        room, profile, deployment, center_fill_profile = resolve_inputs(speaker, **options)
        if profile is None:
            _no_source(speaker)
            return

        console.print(f"\n[bold]Coverage:[/bold] {profile.display_name}", style="blue")
        console.print("─" * 60)
        analysis = analyze_coverage(room, profile, deployment, center_fill_profile)
        print_analysis(analysis)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        sys.exit(1)


@main.command()
@deployment_options
@click.option("--plane", type=click.Choice(list(PLANE_CHOICES)), default="top", show_default=True)
@click.option("--resolution", "-r", type=click.FloatRange(min=0.05), default=0.5,
              show_default=True, help="Cell size in meters")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the field to HDF5")
@click.option("--budget-ms", type=click.FloatRange(min=0.1), default=12.0, show_default=True,
              help="Work per frame slice in milliseconds")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output with tracebacks")
def field(
    speaker: str,
    plane: str,
    resolution: float,
    output: Path | None,
    budget_ms: float,
    verbose: bool,
    **options,
):
    """Sample the SPL field over a plane of the room."""
    try:
        room, profile, deployment, center_fill_profile = resolve_inputs(speaker, **options)
        if profile is None:
            _no_source(speaker)
            return

        console.print(f"\n[bold]SPL field:[/bold] {profile.display_name}", style="blue")
        console.print("─" * 60)

        sampling_plane = SamplingPlane(PLANE_CHOICES[plane], resolution=resolution)
        grid = sampling_plane.grid_for(room)
        print_field_info(console, room, profile, deployment, grid, output)

        start_time = time.time()
        progress = SamplingProgress(console, grid.num_cells)
        try:
            result = run_to_completion(
                sampling_plane,
                room,
                profile,
                deployment,
                center_fill_profile,
                on_cell=progress.update,
                settings=SamplerSettings(slice_budget_ms=budget_ms),
            )
        except KeyboardInterrupt:
            progress.finish()
            console.print("\n[yellow]Interrupted by user[/yellow]")
            sys.exit(130)
        finally:
            progress.finish()
        runtime = time.time() - start_time

        analysis = analyze_coverage(room, profile, deployment, center_fill_profile)
        plane_coverage = coverage_from_field(result, analysis.center_stage_spl)

        console.print("─" * 60)
        console.print("✓ [bold green]Field complete![/bold green]")
        console.print(f"  SPL range: {result.min_spl:.1f} to {result.max_spl:.1f} dB")
        console.print(f"  Plane coverage: {plane_coverage:.0f}% within -10/+6 dB of center stage")
        console.print(f"  Runtime: {format_time(runtime)}")

        if output is not None:
            request = FieldRequest.capture(room, profile, deployment, center_fill_profile)
            with FieldResultWriter(output) as writer:
                writer.write(result, request=request, coverage=analysis, runtime_seconds=runtime)
            console.print(f"  Output: {output} ({output.stat().st_size / 1e3:.1f} kB)")

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
