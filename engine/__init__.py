"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder
"""

from engine.stepper  import Stepper, StepperState
from engine.recorder import Recorder, RunMetrics

__all__ = [
    "Stepper",
    "StepperState",
    "Recorder",
    "RunMetrics",
]
