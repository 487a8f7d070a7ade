from .recorder import StepRecorder
from .snapshot import clone_binary, clone_multiway

__all__ = ["StepRecorder", "clone_binary", "clone_multiway"]
