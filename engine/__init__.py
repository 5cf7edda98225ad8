"""
engine/
-------
Playback, replay, history & recording layer.

    from engine import Stepper, History, reconstruct, Recorder

The session object lives in ``engine.workspace`` (it depends on
``settings``, which itself reads defaults from this package).
"""

from engine.history  import History
from engine.recorder import Recorder, RunMetrics
from engine.replay   import EMPTY_OVERLAY, Overlay, reconstruct
from engine.stepper  import SPEED_PRESETS, Stepper, StepperState

__all__ = [
    "History",
    "Overlay",
    "EMPTY_OVERLAY",
    "reconstruct",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
]
