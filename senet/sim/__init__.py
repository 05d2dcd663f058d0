"""Simulation headless et parallélisation des parties."""

from .parallel import ParallelRolloutRunner, PolicyMatchup, RolloutSummary, WorkerSummary
from .runner import EpisodeSummary, HeadlessEnv, StepResult

__all__ = [
    "HeadlessEnv",
    "StepResult",
    "EpisodeSummary",
    "ParallelRolloutRunner",
    "PolicyMatchup",
    "RolloutSummary",
    "WorkerSummary",
]
