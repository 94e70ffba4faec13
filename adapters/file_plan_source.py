import json
import logging
from typing import Dict, Any

from adapters.plan_source import PlanSource
from app.errors import PlanUnavailable

logger = logging.getLogger(__name__)


class FilePlanSource(PlanSource):
    """Reads the plan JSON from disk on every call; nothing is cached."""

    def __init__(self, path: str):
        self.path = path

    def load_plan(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            logger.error("plan file not found at %s", self.path)
            raise PlanUnavailable("plan.json not found") from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("plan file at %s is unreadable: %s", self.path, e)
            raise PlanUnavailable("plan.json invalid") from e

        if not isinstance(data, dict):
            logger.error("plan file at %s is not a JSON object", self.path)
            raise PlanUnavailable("plan.json invalid")
        return data
