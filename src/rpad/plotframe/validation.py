import logging
from typing import Any, Callable, Dict, Iterable, List, Sequence, Union

import chex
import matplotlib.colors as mcolors
import numpy as np
from matplotlib.artist import Artist
from mpl_toolkits.mplot3d import Axes3D

from rpad.plotframe.errors import (
    InvalidColor,
    InvalidColorCount,
    InvalidLabelCount,
    InvalidParent,
    InvalidRotation,
    InvalidUpdateTarget,
    InvalidVector,
    StylePropertyError,
)

logger = logging.getLogger(__name__)

ORTHONORMAL_TOLERANCE = 1e-4

# Shapes accepted for a 3-vector: flat, row, or column.
VECTOR_SHAPES = {(3,), (1, 3), (3, 1)}


def is_orthonormal(R: np.ndarray, tol: float = ORTHONORMAL_TOLERANCE) -> bool:
    """Check that R @ R.T equals the identity, elementwise within tol."""
    eye_diff = np.abs(R @ R.T - np.eye(3))
    return bool(np.all(eye_diff < tol))


def check_rotation_matrix(rotation_matrix) -> np.ndarray:
    """
    Validate a rotation matrix and return it as a float array.

    Raises:
        InvalidRotation: if the matrix is not 3x3, contains NaN/Inf, or is not
            orthonormal within ORTHONORMAL_TOLERANCE.
    """
    try:
        R = np.array(rotation_matrix, dtype=float)
    except (TypeError, ValueError) as err:
        raise InvalidRotation("Rotation matrix must be numeric.") from err

    try:
        chex.assert_shape(R, (3, 3))
    except AssertionError as err:
        raise InvalidRotation(
            f"Rotation matrix must be 3-by-3, got shape {R.shape}."
        ) from err

    if not np.all(np.isfinite(R)):
        raise InvalidRotation("Rotation matrix must not contain NaN or Inf values.")

    if not is_orthonormal(R):
        raise InvalidRotation(
            f"Must be orthonormal (within tolerance {ORTHONORMAL_TOLERANCE}), i.e., "
            "the basis vectors must be perpendicular and unit length."
        )
    return R


def _as_vector3(value, name: str, allow_scalar: bool = False) -> np.ndarray:
    try:
        v = np.array(value, dtype=float)
    except (TypeError, ValueError) as err:
        raise InvalidVector(f"{name} must be numeric.") from err

    if allow_scalar and v.size == 1:
        return np.full(3, v.item())
    if v.shape not in VECTOR_SHAPES:
        expected = "a scalar or 3 elements" if allow_scalar else "3 elements"
        raise InvalidVector(f"{name} must have {expected}, got shape {v.shape}.")
    return v.reshape(3)


def normalize_translation(translation_vector) -> np.ndarray:
    """Translation as a (3,) array. Any NaN resets the whole vector to the origin."""
    if translation_vector is None:
        return np.zeros(3)
    t = _as_vector3(translation_vector, "Translation vector")
    if np.any(np.isnan(t)):
        logger.debug(f"Translation {t} contains NaN, using [0, 0, 0]")
        return np.zeros(3)
    return t


def normalize_lengths(basis_vector_lengths) -> np.ndarray:
    """Basis vector lengths as a (3,) array. Any NaN resets all lengths to 1."""
    if basis_vector_lengths is None:
        return np.ones(3)
    lengths = _as_vector3(basis_vector_lengths, "Basis vector lengths", allow_scalar=True)
    if np.any(np.isnan(lengths)):
        logger.debug(f"Basis vector lengths {lengths} contain NaN, using 1")
        return np.ones(3)
    if np.any(lengths < 0):
        raise InvalidVector(f"Basis vector lengths must be non-negative, got {lengths}.")
    return lengths


def normalize_labels(labels: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(labels, str):
        return [labels] * 3
    labels = [str(label) for label in labels]
    if len(labels) != 3:
        raise InvalidLabelCount(
            f"Labels must be a single string or 3 strings, got {len(labels)}."
        )
    return labels


def resolve_colors(basis_colors) -> np.ndarray:
    """
    Resolve any matplotlib color specification to 3 RGB triplets.

    A single color is used for all 3 axes.

    Returns:
        3x3 array, one RGB row per basis vector.
    """
    try:
        rgba = mcolors.to_rgba_array(basis_colors)
    except (TypeError, ValueError) as err:
        raise InvalidColor(f"Could not resolve basis colors {basis_colors!r}.") from err

    if len(rgba) not in (1, 3):
        raise InvalidColorCount(
            "Must contain either 1 color (for all 3 axes) or 3 colors "
            f"(one for each of the 3 axes), got {len(rgba)}."
        )
    if len(rgba) == 1:
        rgba = np.repeat(rgba, 3, axis=0)
    return rgba[:, :3]


def check_parent(parent) -> Axes3D:
    """Check that parent is a 3-D axes which has not been removed from its figure."""
    if not isinstance(parent, Axes3D):
        raise InvalidParent(
            f"Parent must be a 3-D axes (Axes3D), got {type(parent).__name__}."
        )
    figure = parent.figure
    if figure is None or parent not in figure.axes:
        raise InvalidParent(
            "Parent must be an axes which has not been removed from its figure."
        )
    return parent


def check_frame_handle(handle) -> bool:
    """
    Check a handle passed for updating.

    Returns:
        True if handle holds a frame to update in place, False if a new frame
        should be created (no handle, or an empty one).
    """
    if handle is None:
        return False
    if not hasattr(handle, "arrows") or not hasattr(handle, "labels"):
        raise InvalidUpdateTarget(
            f"Expected a FrameHandle returned by plot_frame, got {type(handle).__name__}."
        )
    if handle.is_empty:
        return False

    n_arrows, n_labels = len(handle.arrows), len(handle.labels)
    if n_arrows != 3 or n_labels not in (0, 3):
        raise InvalidUpdateTarget(
            "Must be either an empty FrameHandle or a FrameHandle returned by a "
            f"previous call to plot_frame (got {n_arrows} arrows, {n_labels} labels)."
        )

    parent = handle.parent
    texts = [*handle.labels]
    if getattr(handle, "name_label", None) is not None:
        texts.append(handle.name_label)
    attached = (
        parent is not None
        and all(arrow in parent.collections for arrow in handle.arrows)
        and all(text in parent.texts for text in texts)
    )
    if not attached:
        raise InvalidUpdateTarget(
            "Frame has been removed from its axes (or the axes were cleared)."
        )
    return True


def apply_properties(
    artists: Iterable[Artist], properties: Dict[str, Any], argument: str
) -> None:
    """Set matplotlib properties on artists, re-raising rejections as StylePropertyError."""
    if not properties:
        return
    for artist in artists:
        try:
            artist.set(**properties)
        except (AttributeError, TypeError, ValueError) as err:
            raise StylePropertyError(
                f"One or more properties or values in the {argument} argument "
                f"are not valid: {err}"
            ) from err


def check_properties(
    factory: Callable[[], Artist], properties: Dict[str, Any], argument: str
) -> None:
    """Try properties on a scratch artist, so bad values fail before anything is drawn."""
    apply_properties([factory()], properties, argument)
