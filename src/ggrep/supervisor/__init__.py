from .barrier import CompletionBarrier
from .manager import TaskSupervisor

__all__ = ['CompletionBarrier', 'TaskSupervisor']
