"""
Core workload engine: payloads, key sampling, workers and the worker pool.
"""

from .error_sink import ErrorLog, ErrorRecord
from .key_sampler import KeySampler
from .payload import PayloadGenerator
from .worker_pool import WorkerPool
from .workload import WorkloadConfig

__all__ = ['ErrorLog', 'ErrorRecord', 'KeySampler', 'PayloadGenerator', 'WorkerPool', 'WorkloadConfig']
