"""
Core modules for CPU Scheduling Simulator
"""

from .errors import (SchedulerError, InputFormatError, CapacityExceededError,
                     SimulationInvariantError)
from .process import ProcessDescriptor, ProcessRuntime, ProcessState, create_runtime_table
from .event import Event, EventType
from .event_queue import EventQueue
from .ready_queue import ReadyQueue
from .dispatcher import Dispatcher, CpuState
from .metrics import CompletionRecord, AggregateRecord, SchedulerStats
from .scheduler_base import (BaseScheduler, GanttEntry, simulate, FCFS_QUANTUM,
                             DEFAULT_TIME_SLICES, IDLE_PID)

__all__ = [
    'SchedulerError',
    'InputFormatError',
    'CapacityExceededError',
    'SimulationInvariantError',
    'ProcessDescriptor',
    'ProcessRuntime',
    'ProcessState',
    'create_runtime_table',
    'Event',
    'EventType',
    'EventQueue',
    'ReadyQueue',
    'Dispatcher',
    'CpuState',
    'CompletionRecord',
    'AggregateRecord',
    'SchedulerStats',
    'BaseScheduler',
    'GanttEntry',
    'simulate',
    'FCFS_QUANTUM',
    'DEFAULT_TIME_SLICES',
    'IDLE_PID',
]
