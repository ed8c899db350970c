import logging
from pathlib import Path
from typing import Optional, Sequence

from matplotlib import pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from pinfoplot.config import RenderConfig
from pinfoplot.errors import EmptyGridError, WriteError
from pinfoplot.renderer.lengths import parse_length
from pinfoplot.renderer.panels import PlotPanel

Grid = Sequence[Sequence[Optional[PlotPanel]]]

logger = logging.getLogger(__name__)


class CompositeRenderer:
    """
    Lays plot panels out on a grid sized in physical units and writes the result as a PNG.

    The canvas size comes from RenderConfig.width/height (e.g. "10cm", "4in"). Both are
    parsed before any figure is created, so a bad dimension never allocates a canvas.
    """

    config: RenderConfig

    def __init__(self, config: RenderConfig) -> None:
        self.config = config

    def render(self, panels: Sequence[PlotPanel], output_path: str | Path | None = None) -> Path:
        """Stacks panels in a single column, first panel on top."""
        return self.render_grid([[panel] for panel in panels], output_path)

    def save_panel(self, panel: PlotPanel, output_path: str | Path | None = None) -> Path:
        return self.render_grid([[panel]], output_path)

    def render_grid(self, grid: Grid, output_path: str | Path | None = None) -> Path:
        path = Path(output_path if output_path is not None else self.config.output_path)
        fig = self.compose_grid(grid)
        try:
            _write_png(fig, path, self.config.dpi)
        finally:
            plt.close(fig)

        logger.info(f"Saved {len(grid)}x{len(grid[0])} plot grid at {path}")
        return path

    def compose_grid(self, grid: Grid) -> Figure:
        """Draws every panel of grid into its own cell; None cells are left blank."""
        rows, cols = _grid_shape(grid)
        width = parse_length(self.config.width)
        height = parse_length(self.config.height)

        fig, axes = plt.subplots(
            nrows=rows, ncols=cols, figsize=(width, height), dpi=self.config.dpi, squeeze=False
        )
        for j, row in enumerate(grid):
            for i, panel in enumerate(row):
                if panel is None:
                    axes[j][i].set_axis_off()
                    continue
                _draw_panel(axes[j][i], panel)

        fig.tight_layout()
        return fig


def _grid_shape(grid: Grid) -> tuple[int, int]:
    if not grid:
        raise EmptyGridError("no plots to render")

    cols = len(grid[0])
    for j, row in enumerate(grid):
        if not row:
            raise EmptyGridError(f"row {j} of the plot grid is empty")
        if len(row) != cols:
            raise EmptyGridError(f"row {j} has {len(row)} plots, expected {cols}")
    return len(grid), cols


def _draw_panel(ax: Axes, panel: PlotPanel) -> None:
    for series in panel.series:
        ax.plot(
            series.x, series.y, label=series.label, color=series.color, linewidth=series.linewidth
        )

    ax.set_title(panel.title, fontsize="small")
    ax.set_xlabel(panel.x_label, fontsize="small")
    ax.set_ylabel(panel.y_label, fontsize="small")
    ax.tick_params(labelsize="x-small")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right", fontsize="x-small")


def _write_png(fig: Figure, path: Path, dpi: int) -> None:
    # Truncates an existing file; a failed write may leave a partial file behind.
    try:
        with open(path, "wb") as f:
            fig.savefig(f, format="png", dpi=dpi)
    except OSError as exc:
        raise WriteError(f"cannot write image to {path}: {exc}") from exc
