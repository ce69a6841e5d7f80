import logging
import pickle
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import typer
from mpl_toolkits.mplot3d import Axes3D

from rpad.plotframe.config import FrameStyle
from rpad.plotframe.logging_config import setup_logging
from rpad.plotframe.utils import plot_transform, set_axes_equal

logger = logging.getLogger("rpad.plotframe.scripts.plot_poses")

PREFIX = "T_world_from_"


def plot_poses(
    poses_file: Path = Path.cwd() / "captures/poses.pkl",
    sample: Optional[str] = None,
    scale: float = 0.1,
    style_file: Optional[Path] = None,
    label_basis: bool = False,
    verbose: bool = False,
):
    """
    Plot every T_world_from_* pose of one sample in a poses.pkl file.

    The file maps image names to dicts of 4x4 homogeneous transforms, e.g.
    {"image_0000.png": {"T_world_from_camera": ..., "T_world_from_tag": ...}}.
    """
    setup_logging(verbose)

    with open(poses_file, "rb") as f:
        poses = pickle.load(f)
    if not poses:
        raise typer.BadParameter(f"No poses in {poses_file}")

    # Default to the first sample.
    if sample is None:
        sample = next(iter(poses))
    if sample not in poses:
        raise typer.BadParameter(f"Sample '{sample}' not in {poses_file}")

    style = FrameStyle.from_yaml(style_file) if style_file else FrameStyle()
    if label_basis:
        style.label_basis = True

    fig = plt.figure()
    ax: Axes3D = fig.add_subplot(111, projection="3d")  # type: ignore

    # Plot world frame at origin
    plot_transform(np.eye(4), ax, label="World", scale=scale, **style.plot_kwargs())
    for name, T in poses[sample].items():
        if not name.startswith(PREFIX):
            continue
        label = name[len(PREFIX):].replace("_", " ").capitalize()
        logger.info(f"Plotting {label}:\n{np.asarray(T)}")
        plot_transform(T, ax, label=label, scale=scale, **style.plot_kwargs())

    set_axes_equal(ax)
    ax.set_title(sample)
    plt.show()


if __name__ == "__main__":
    typer.run(plot_poses)
