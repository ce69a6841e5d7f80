"""
Frame style configuration.

Styles can be kept in a YAML file and shared between scripts:

    basis_colors: [r, g, b]
    labels: [X, Y, Z]
    label_basis: true
    text_properties:
      fontsize: 12
      fontweight: bold
    arrow:
      line_width: 2.0
      head_size: 0.4
      alignment: tail
      line_style: null
      alpha: null
      zorder: null
      extra: {}
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Sequence

import numpy as np
import yaml

from rpad.plotframe.frame import (
    DEFAULT_COLORS,
    DEFAULT_HEAD_SIZE,
    DEFAULT_LABELS,
    DEFAULT_LINE_WIDTH,
    ArrowProperties,
)

logger = logging.getLogger(__name__)


def _to_plain(value):
    # YAML safe_dump only takes plain lists, dicts and scalars.
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    return value


@dataclass
class FrameStyle:
    """Keyword arguments of plot_frame that control how a frame looks."""

    basis_colors: Any = DEFAULT_COLORS
    labels: Sequence[str] = DEFAULT_LABELS
    label_basis: bool = False
    text_properties: Dict[str, Any] = field(default_factory=dict)
    arrow: ArrowProperties = field(default_factory=ArrowProperties)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrameStyle":
        arrow_data = data.get("arrow") or {}
        arrow = ArrowProperties(
            line_width=arrow_data.get("line_width", DEFAULT_LINE_WIDTH),
            head_size=arrow_data.get("head_size", DEFAULT_HEAD_SIZE),
            alignment=arrow_data.get("alignment", "tail"),
            line_style=arrow_data.get("line_style"),
            alpha=arrow_data.get("alpha"),
            zorder=arrow_data.get("zorder"),
            extra=dict(arrow_data.get("extra") or {}),
        )
        labels = data.get("labels", DEFAULT_LABELS)
        return cls(
            basis_colors=data.get("basis_colors", DEFAULT_COLORS),
            labels=labels if isinstance(labels, str) else tuple(labels),
            label_basis=bool(data.get("label_basis", False)),
            text_properties=dict(data.get("text_properties") or {}),
            arrow=arrow,
        )

    @classmethod
    def from_yaml(cls, config_path) -> "FrameStyle":
        """
        Load a style from a YAML file. Missing keys keep their defaults.

        Raises:
            FileNotFoundError: if config_path does not exist.
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Style file not found: {config_path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loading frame style from {config_path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return _to_plain(asdict(self))

    def to_yaml(self, config_path) -> None:
        with open(config_path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Frame style saved to {config_path}")

    def plot_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for plot_frame / plot_transform."""
        return {
            "basis_colors": self.basis_colors,
            "labels": self.labels,
            "label_basis": self.label_basis,
            "text_properties": dict(self.text_properties),
            "arrow_properties": self.arrow,
        }
