"""Wait/verify layer: evaluator, poller, dispatcher, readiness gate."""

from pagegate.sync.dispatcher import Dispatcher
from pagegate.sync.evaluator import ConditionEvaluator
from pagegate.sync.gate import ReadinessGate
from pagegate.sync.poller import BoundedPoller

__all__ = ["BoundedPoller", "ConditionEvaluator", "Dispatcher", "ReadinessGate"]
