import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import typer
from matplotlib.animation import FuncAnimation
from mpl_toolkits.mplot3d import Axes3D
from scipy.spatial.transform import Rotation

from rpad.plotframe.config import FrameStyle
from rpad.plotframe.frame import plot_frame
from rpad.plotframe.logging_config import setup_logging

logger = logging.getLogger("rpad.plotframe.scripts.animate_frame")


def animate(
    n_frames: int = 180,
    radius: float = 1.0,
    scale: float = 0.5,
    interval_ms: int = 30,
    style_file: Optional[Path] = None,
    label_basis: bool = True,
    out_file: Optional[Path] = None,
    verbose: bool = False,
):
    """Move a frame around a circle, yawing and rolling, by updating it in place."""
    setup_logging(verbose)

    style = FrameStyle.from_yaml(style_file) if style_file else FrameStyle()
    style.label_basis = label_basis

    fig = plt.figure(figsize=(8, 6))
    ax: Axes3D = fig.add_subplot(111, projection="3d")  # type: ignore

    # Static world frame, plus the moving one.
    plot_frame(parent=ax, basis_vector_lengths=scale, basis_colors="k")
    frame = plot_frame(parent=ax, basis_vector_lengths=scale, **style.plot_kwargs())

    ax.set_xlim([-1.5 * radius, 1.5 * radius])
    ax.set_ylim([-1.5 * radius, 1.5 * radius])
    ax.set_zlim([-0.75 * radius, 0.75 * radius])

    def update(i):
        angle = 2 * np.pi * i / n_frames
        t = radius * np.array([np.cos(angle), np.sin(angle), 0.0])
        R = Rotation.from_euler("ZYX", [angle, 0, 2 * angle]).as_matrix()
        # Columns of R are the rotated axes.
        plot_frame(
            R,
            t,
            scale,
            update_frame=frame,
            matrix_indexing="columnmajor",
            **style.plot_kwargs(),
        )
        return frame.artists

    ani = FuncAnimation(fig, update, frames=n_frames, interval=interval_ms, blit=False)

    if out_file is not None:
        logger.info(f"Saving animation to {out_file}")
        ani.save(str(out_file))
    else:
        plt.show()


if __name__ == "__main__":
    typer.run(animate)
