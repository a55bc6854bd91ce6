"""Progress display for field sampling.

Provides a rich terminal UI while the incremental sampler fills a plane:
- Progress bar with percentage
- Elapsed time and ETA
- Sampling throughput (cells/s)
- Memory usage
"""

import time

import psutil
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from sonicfield.core.combiner import FieldSample
from sonicfield.sampling.plane import PlaneGrid
from sonicfield.sources.base import (
    AcousticSourceProfile,
    DeploymentConfiguration,
    DeploymentMode,
    RoomDimensions,
)


def format_time(seconds: float) -> str:
    """Format time duration for display.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "850ms", "12s" or "1m 23s"
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.0f}s"
    else:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs:02d}s"


class SamplingProgress:
    """Real-time progress display for a field sampling run.

    Example:
        >>> with SamplingProgress(console, grid.num_cells) as progress:
        ...     run_to_completion(plane, room, profile, deployment, on_cell=progress.update)
    """

    def __init__(self, console: Console, num_cells: int, update_interval: float = 0.1):
        """Initialize progress display.

        Args:
            console: Rich console instance
            num_cells: Total number of cells in the plane
            update_interval: Minimum time between updates (seconds)
        """
        self.console = console
        self.num_cells = num_cells
        self.update_interval = update_interval

        self.start_time = time.time()
        self.last_update = 0.0
        self.cells_done = 0
        self.peak_memory = 0.0
        self._finished = False

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            console=console,
        )
        self.task = self.progress.add_task("Sampling", total=num_cells)
        self.progress.start()

    def update(self, row: int, col: int, sample: FieldSample):
        """Cell callback for the sampler; rate-limits redraws."""
        self.cells_done += 1
        current_time = time.time()
        if current_time - self.last_update < self.update_interval:
            return

        self.progress.update(self.task, completed=self.cells_done)

        elapsed = current_time - self.start_time
        rate = self.cells_done / elapsed if elapsed > 0 else 0.0

        current_memory = psutil.Process().memory_info().rss / (1024**2)  # MB
        self.peak_memory = max(self.peak_memory, current_memory)

        self.progress.update(
            self.task,
            description=(
                f"Sampling [dim]{rate:,.0f} cells/s | "
                f"{current_memory:.0f} MB (peak {self.peak_memory:.0f} MB)[/dim]"
            ),
        )
        self.last_update = current_time

    def finish(self):
        """Stop the progress bar. Safe to call more than once."""
        if self._finished:
            return
        self._finished = True
        self.progress.update(self.task, completed=self.cells_done)
        self.progress.stop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finish()


def print_field_info(
    console: Console,
    room: RoomDimensions,
    profile: AcousticSourceProfile,
    deployment: DeploymentConfiguration,
    grid: PlaneGrid,
    output_path=None,
):
    """Print the sampling parameters before running.

    Args:
        console: Rich console instance
        room: Room dimensions
        profile: Main loudspeaker
        deployment: Deployment configuration
        grid: Plane grid that will be sampled
        output_path: HDF5 output path, if any
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Room", f"{room.width:g} × {room.depth:g} × {room.height:g} m")
    table.add_row("Speaker", f"{profile.display_name} × {deployment.quantity}")

    mode = "stereo L/R" if deployment.deployment_mode is DeploymentMode.STEREO_LR else "single"
    table.add_row("Mode", mode)
    table.add_row(
        "Rigging",
        f"trim {deployment.trim_height:g} m, tilt {deployment.tilt_angle:g}°, "
        f"aim {deployment.horizontal_aim:g}°",
    )

    rows, cols = grid.shape
    table.add_row("Plane", f"{grid.plane.kind} ({rows} × {cols} cells)")
    table.add_row("Resolution", f"{grid.plane.resolution:g} m")
    if output_path is not None:
        table.add_row("Output", str(output_path))

    console.print(table)
    console.print()
