"""
progeval.core.names
===================

Typed names shared across the package.

- `Band`: an Enum for the conventional effect-size interpretation labels.
- `Literal` tags for effect-size measures and power unknowns.

Examples
--------
>>> from progeval.core.names import Band
>>> Band.MEDIUM.value
'medium'
>>> Band("large") is Band.LARGE
True
"""

from __future__ import annotations
from enum import Enum
from typing import Literal


class Band(str, Enum):
    """Conventional effect-size interpretation labels.

    - SMALL / MEDIUM / LARGE: Cohen's (1988) benchmarks
    - VERY_SMALL / VERY_LARGE / HUGE: Sawilowsky's (2009) extension
    """

    VERY_SMALL = "very_small"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    VERY_LARGE = "very_large"
    HUGE = "huge"


# Effect-size measure tags.
MeasureTag = Literal["cohen_d", "phi", "cramers_v"]

# The four quantities of a two-sample power analysis.
PowerUnknown = Literal["effect_size", "alpha", "power", "n"]
