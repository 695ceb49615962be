"""Static plot export for parsed trajectories."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from trajview.core.trajectory import Trajectory  # noqa: E402
from trajview.core.viewport import fit_area  # noqa: E402


def plot_trajectory(
    trajectory: Trajectory,
    output_path: str | Path,
    frame_index: int | None = None,
    display_aspect: float = 4.0 / 3.0,
    marker_size: float = 12.0,
) -> Path:
    """Render one playback frame, or every frame coloured by index, to an image.

    Axes limits come from the trajectory bounding box fitted to
    ``display_aspect`` so the export matches the desktop viewport.
    """
    if frame_index is not None and not 0 <= frame_index < trajectory.frame_count():
        raise IndexError(
            f"frame {frame_index} out of range for {trajectory.frame_count()} frames"
        )

    left, right, bottom, top = fit_area(trajectory.area(), display_aspect)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    height = 6.0
    fig, ax = plt.subplots(figsize=(height * display_aspect, height))
    if frame_index is not None:
        positions = trajectory.frames[frame_index].positions
        ax.scatter(positions[:, 0], positions[:, 1], s=marker_size, marker="s")
        ax.set_title(f"frame {frame_index} / {trajectory.frame_count()}")
    elif trajectory.position_count():
        positions = np.concatenate([frame.positions for frame in trajectory.frames])
        colors = np.concatenate(
            [np.full(len(frame), index) for index, frame in enumerate(trajectory.frames)]
        )
        mappable = ax.scatter(
            positions[:, 0], positions[:, 1], c=colors, s=marker_size, marker="s", cmap="viridis"
        )
        fig.colorbar(mappable, ax=ax, label="playback frame")
        ax.set_title(f"{trajectory.frame_count()} frames")
    else:
        ax.set_title("no data")

    ax.set_xlim(left, right)
    ax.set_ylim(bottom, top)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    return output
