"""
Image classification contract and stand-in implementations.

The security service only needs one question answered about a camera frame:
"is there a cat in it?". The raster is an opaque handle (a ``QImage`` in the
desktop app, anything at all in tests); the core never inspects pixels.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol


class ImageService(Protocol):
    """
    Protocol interface for cat classification.

    Methods
    -------
    image_contains_cat(image, confidence_threshold)
        Return True if the image contains a cat with at least the given
        confidence (percent, 0-100).
    """

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        ...


@dataclass
class FakeImageService:
    """
    Stand-in classifier that answers at random.

    Useful for running the desktop app without a trained model. The
    confidence threshold is accepted and ignored.

    Parameters
    ----------
    seed
        Optional seed for reproducible answers.
    """

    seed: Optional[int] = None
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._rng.random() < 0.5


@dataclass
class StaticImageService:
    """
    Classifier returning a scripted answer.

    Records every call so callers can check which threshold was used.

    Parameters
    ----------
    result
        Answer returned for every image.
    """

    result: bool = False
    calls: List[float] = field(default_factory=list)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        self.calls.append(confidence_threshold)
        return self.result
