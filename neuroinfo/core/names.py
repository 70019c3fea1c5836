"""
neuroinfo.core.names
====================

Typed names shared across the package.

- `BiasMethod`: an Enum for the available sampling-bias corrections.
- `StimulusIndex`: NewType wrapper for clarity.
- `ResponseAxis`: the axis order of a response tensor.

Examples
--------
>>> from neuroinfo.core.names import BiasMethod, StimulusIndex, RESPONSE_AXES
>>> BiasMethod.PANZERI_TREVES.value
'panzeri_treves'
>>> s = StimulusIndex(2); isinstance(s, int)
True
>>> RESPONSE_AXES
('channel', 'trial', 'stimulus')
"""

from __future__ import annotations
from enum import Enum
from typing import Literal, NewType, Tuple


class BiasMethod(str, Enum):
    """Available finite-sampling bias corrections.

    - PANZERI_TREVES: Bayesian extrapolation of the number of occupied bins
      (Panzeri & Treves, 1996)
    """

    PANZERI_TREVES = "panzeri_treves"


# Typed alias for stimulus indices (thin wrapper over int).
StimulusIndex = NewType("StimulusIndex", int)

# Response tensors are indexed [channel, trial slot, stimulus].
ResponseAxis = Literal["channel", "trial", "stimulus"]
RESPONSE_AXES: Tuple[ResponseAxis, ResponseAxis, ResponseAxis] = (
    "channel",
    "trial",
    "stimulus",
)

# Marks a trial slot that holds no valid response.
UNASSIGNED: int = -1
