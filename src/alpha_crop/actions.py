"""
Action registry with recording and playback.

Commands are registered under a display name and can be invoked directly
or recorded as steps into an action list that can be saved as JSON and
replayed later on other documents.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .commands import COMMAND_NAME, CropResult, crop_max_rectangle
from .exceptions import ActionError
from .geometry import Bounds
from .host import ImageDocument

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
ActionHandler = Callable[..., CropResult]


@dataclass
class ActionStep:
    """One recorded invocation: the action name and its options."""

    name: str
    options: Dict[str, Any] = field(default_factory=dict)


class ActionRegistry:
    """Maps action names to handlers and records invocations."""

    def __init__(self) -> None:
        self._handlers: Dict[str, ActionHandler] = {}
        self._recording: Optional[List[ActionStep]] = None

    def register(self, name: str, handler: ActionHandler) -> None:
        if name in self._handlers:
            raise ActionError("Action already registered", action=name)
        self._handlers[name] = handler

    def names(self) -> List[str]:
        return sorted(self._handlers)

    @property
    def is_recording(self) -> bool:
        return self._recording is not None

    def start_recording(self) -> None:
        self._recording = []

    def stop_recording(self) -> List[ActionStep]:
        steps = self._recording or []
        self._recording = None
        return steps

    def record_action(self, name: str, options: Optional[Dict[str, Any]] = None) -> None:
        """Append a step to the current recording.

        Raises:
            ActionError: If nothing is being recorded or the action is unknown
        """
        if self._recording is None:
            raise ActionError("Not recording", action=name)
        if name not in self._handlers:
            raise ActionError("Unknown action", action=name)
        self._recording.append(ActionStep(name, dict(options or {})))

    def invoke(self, name: str, document: Optional[ImageDocument], **options: Any) -> CropResult:
        """Run an action on a document, recording it when a recording is active."""
        handler = self._handlers.get(name)
        if handler is None:
            raise ActionError("Unknown action", action=name)

        if self.is_recording:
            try:
                self.record_action(name, _serializable_options(options))
            except ActionError as e:
                logger.warning(f"Could not record {name}: {e}")

        return handler(document, **options)

    def play(self, steps: List[ActionStep], document: Optional[ImageDocument]) -> List[CropResult]:
        """Replay recorded steps on ``document`` in order."""
        return [
            self.invoke(step.name, document, **_deserialize_options(step.options))
            for step in steps
        ]


def _serializable_options(options: Dict[str, Any]) -> Dict[str, Any]:
    serialized = {}
    for key, value in options.items():
        serialized[key] = value.to_dict() if isinstance(value, Bounds) else value
    return serialized


def _deserialize_options(options: Dict[str, Any]) -> Dict[str, Any]:
    deserialized = dict(options)
    bounds = deserialized.get("source_bounds")
    if isinstance(bounds, dict):
        deserialized["source_bounds"] = Bounds(**bounds)
    return deserialized


def default_registry() -> ActionRegistry:
    """Return a registry with the crop command registered."""
    registry = ActionRegistry()
    registry.register(COMMAND_NAME, crop_max_rectangle)
    return registry


def save_actions(steps: List[ActionStep], output_path: PathLike) -> None:
    """Write recorded steps to a JSON action file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8') as f:
        json.dump({"actions": [asdict(step) for step in steps]}, f, indent=2)


def load_actions(action_path: PathLike) -> List[ActionStep]:
    """Read steps from a JSON action file.

    Raises:
        ActionError: If the file is missing or malformed
    """
    path = Path(action_path)
    if not path.exists():
        raise ActionError(f"Action file not found: {path}")

    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
        return [ActionStep(item["name"], item.get("options", {})) for item in data["actions"]]
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ActionError(f"Invalid action file {path}: {e}")
