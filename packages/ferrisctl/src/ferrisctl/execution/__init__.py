from .steps import Step, StepOutcome, StepRunner
from .wrapper import explain_steps, finish_lane, run_steps

__all__ = ["Step", "StepOutcome", "StepRunner", "explain_steps", "finish_lane", "run_steps"]
