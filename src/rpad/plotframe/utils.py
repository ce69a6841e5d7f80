import logging
from typing import Literal, Optional, Tuple

import chex
import numpy as np
from mpl_toolkits.mplot3d import Axes3D

from rpad.plotframe.errors import InvalidRotation
from rpad.plotframe.frame import FrameHandle, MatrixIndexing, plot_frame

logger = logging.getLogger(__name__)


def plot_transform(
    T: np.ndarray[Tuple[Literal[4], Literal[4]], np.dtype[np.floating]],
    ax: Optional[Axes3D] = None,
    label: Optional[str] = None,
    scale=1.0,
    **kwargs,
) -> FrameHandle:
    """
    Plots a 3D coordinate frame given a transformation matrix.

    Parameters:
    - T: 4x4 numpy array, homogeneous transformation matrix. Its columns are
      the frame axes.
    - ax: matplotlib 3D axis to plot on (default: current axes).
    - label: Name of the frame, drawn at its origin.
    - scale: Scaling factor for the axis lengths, scalar or 3 elements.
    - kwargs: Passed on to plot_frame, e.g. update_frame, label_basis.
    """
    T = np.asarray(T, dtype=float)
    try:
        chex.assert_shape(T, (4, 4))
    except AssertionError as err:
        raise InvalidRotation(f"T must be a 4x4 transform, got shape {T.shape}.") from err

    origin = T[:3, 3]
    handle = plot_frame(
        T[:3, :3],
        origin,
        scale,
        parent=ax,
        matrix_indexing=MatrixIndexing.COLUMN_MAJOR,
        **kwargs,
    )

    # Legend entries, e.g. "Camera X". Labels starting with "_" are left out of legends.
    for arrow, axis in zip(handle.arrows, "XYZ"):
        arrow.set_label(f"{label} {axis}" if label else f"_{axis}")

    # Label the frame
    if label:
        if handle.name_label is None:
            handle.name_label = handle.parent.text(*origin, label, color="black")
        else:
            handle.name_label.set_text(label)
            handle.name_label.set_position_3d(origin)
    elif handle.name_label is not None:
        handle.name_label.remove()
        handle.name_label = None
    return handle


def set_axes_equal(ax: Axes3D) -> None:
    """Make the x, y and z axes the same length, so frames are not skewed."""
    limits = np.array([ax.get_xlim3d(), ax.get_ylim3d(), ax.get_zlim3d()])
    centers = limits.mean(axis=1)
    radius = 0.5 * np.max(limits[:, 1] - limits[:, 0])
    ax.set_xlim3d([centers[0] - radius, centers[0] + radius])
    ax.set_ylim3d([centers[1] - radius, centers[1] + radius])
    ax.set_zlim3d([centers[2] - radius, centers[2] + radius])
    logger.debug(f"Axes limits set to +/-{radius:.3g} around {centers}")
