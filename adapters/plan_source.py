from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Dict, Any


class PlanSource(ABC):
    @abstractmethod
    def load_plan(self) -> Dict[str, Any]:
        """Return the current plan document or raise PlanUnavailable."""
        ...


class InMemoryPlanSource(PlanSource):
    """Serves a fixed plan; each call hands out a fresh copy."""

    def __init__(self, plan: Dict[str, Any]):
        self._plan = deepcopy(plan)

    def load_plan(self) -> Dict[str, Any]:
        return deepcopy(self._plan)
