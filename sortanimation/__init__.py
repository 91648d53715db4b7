from .algorithms import SORTERS, Algorithm, get_generator
from .catalog import AlgorithmInfo, describe
from .controller import ExecutionController, FreeRunningController, StepResult
from .errors import ConfigurationError, InvariantViolation, SortEngineError
from .events import Compare, Complete, Overwrite, SetState, StepEvent, Swap
from .log import setup_logging
from .model import Bar, Direction, Element, VisualState
from .runner import RunOutcome, run_sort, sort_values, sweep_delay, sweep_steps
from .sequence import WorkingSequence, replay
from .session import SortingSession
from .stats import Statistics, StatisticsAccumulator

__all__ = [
    "Algorithm", "AlgorithmInfo", "Bar", "Compare", "Complete", "ConfigurationError",
    "Direction", "Element", "ExecutionController", "FreeRunningController",
    "InvariantViolation", "Overwrite", "RunOutcome", "SORTERS", "SetState",
    "SortEngineError", "SortingSession", "Statistics", "StatisticsAccumulator",
    "StepEvent", "StepResult", "Swap", "VisualState", "WorkingSequence",
    "describe", "get_generator", "replay", "run_sort", "setup_logging",
    "sort_values", "sweep_delay", "sweep_steps",
]

__version__ = "0.1.0"
