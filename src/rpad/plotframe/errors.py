class PlotFrameError(Exception):
    """Base class for every error raised while plotting a frame."""


class InvalidRotation(PlotFrameError, ValueError):
    """Rotation matrix is the wrong shape, non-finite, or not orthonormal."""


class InvalidVector(PlotFrameError, ValueError):
    """Translation vector or basis vector lengths have the wrong size or sign."""


class InvalidUpdateTarget(PlotFrameError, ValueError):
    """Handle passed for updating does not look like a previously plotted frame."""


class InvalidParent(PlotFrameError, ValueError):
    """Parent is not a 3-D axes, or has been removed from its figure."""


class InvalidLabelCount(PlotFrameError, ValueError):
    """Labels must be a single string or exactly 3 strings."""


class InvalidColor(PlotFrameError, ValueError):
    """Basis colors could not be resolved by matplotlib."""


class InvalidColorCount(InvalidColor):
    """Basis colors must contain 1 color (for all 3 axes) or 3 colors."""


class StylePropertyError(PlotFrameError):
    """matplotlib rejected a custom arrow or text property.

    The matplotlib exception is kept as ``__cause__``.
    """
