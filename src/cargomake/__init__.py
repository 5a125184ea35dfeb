from .config import load_config
from .dag import TargetError, resolve, resolve_goals, validate
from .model import Config, Outcome, Step, Target
from .runner import StepFailure, ToolUnavailable, dispatch, run_plan
from .targets import build_targets

__version__ = "1.0"

__all__ = [
    "Config",
    "Outcome",
    "Step",
    "Target",
    "TargetError",
    "StepFailure",
    "ToolUnavailable",
    "build_targets",
    "dispatch",
    "load_config",
    "resolve",
    "resolve_goals",
    "run_plan",
    "validate",
]
