from .controller import AutoTradeScheduler, DecisionOracle, MarketListing, OracleFailure
from .modes import CycleReport, Decision, DecisionAction, SchedulerState, SchedulerStatus
from .policy import SamplingPolicy
from .timer import PeriodicTask

__all__ = [
    "AutoTradeScheduler",
    "CycleReport",
    "Decision",
    "DecisionAction",
    "DecisionOracle",
    "MarketListing",
    "OracleFailure",
    "PeriodicTask",
    "SamplingPolicy",
    "SchedulerState",
    "SchedulerStatus",
]
