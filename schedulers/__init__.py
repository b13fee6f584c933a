"""
CPU Scheduling Algorithms
"""

from .basic_schedulers import FCFSScheduler, RoundRobinScheduler, run_all_policies

__all__ = [
    'FCFSScheduler',
    'RoundRobinScheduler',
    'run_all_policies',
]
