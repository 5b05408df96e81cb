"""PipelineState: tracks the stage a conversion has reached, optionally on disk."""

import json
import os
from enum import Enum
from typing import Optional


class PipelineStage(Enum):
    UNSTARTED = "unstarted"
    ACQUIRED = "acquired"
    DEPENDENCIES_INSTALLED = "dependencies-installed"
    MANIFEST_PATCHED = "manifest-patched"
    WIZARD_INITIALIZED = "wizard-initialized"
    COMPLETE = "complete"


STAGE_ORDER = list(PipelineStage)


class PipelineState:
    """Owns the current stage and, when given a state file, persists it after each transition.

    The persisted record is informational: a new run always starts from
    UNSTARTED.
    """

    def __init__(self, repository_url: str, state_file: Optional[str] = None):
        self._state_file = state_file
        self._data = {
            "repository_url": repository_url,
            "stage": PipelineStage.UNSTARTED.value,
            "completed_stages": [],
        }

    @property
    def stage(self) -> PipelineStage:
        return PipelineStage(self._data["stage"])

    @property
    def completed_stages(self):
        return [PipelineStage(value) for value in self._data["completed_stages"]]

    def advance_to(self, stage: PipelineStage) -> None:
        """Move to the next stage. Stages cannot be skipped or revisited."""
        position = STAGE_ORDER.index(self.stage) + 1
        expected = STAGE_ORDER[position] if position < len(STAGE_ORDER) else None
        if stage is not expected:
            raise ValueError(f"Cannot move from {self.stage.value} to {stage.value}")
        self._data["stage"] = stage.value
        self._data["completed_stages"].append(stage.value)
        self.save()

    def save(self) -> None:
        """Persist current state to disk, if a state file was configured."""
        if not self._state_file:
            return
        parent = os.path.dirname(self._state_file)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self._state_file, "w") as f:
            json.dump(self._data, f, indent=2)

    @classmethod
    def read(cls, state_file: str) -> dict:
        with open(state_file, "r") as f:
            return json.load(f)
