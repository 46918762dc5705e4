"""
Markers for specific properties of entities.

Wait timers are rare, so they live in a sparse dict keyed by entity id.
KeyboardControlled and CameraFocus carry no data and may only be held by one
entity at a time, so each is stored as the id of its holder.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional

logger = logging.getLogger(__name__)

EntityId = Hashable


@dataclass
class Wait:
    """An entity that is unable to move until the given duration has elapsed."""
    duration: int  # frames
    frames_elapsed: int = 0  # frames

    @property
    def finished(self) -> bool:
        return self.frames_elapsed >= self.duration


class MarkerStore:
    """Holds the marker components of every entity."""

    def __init__(self):
        self._waits: Dict[EntityId, Wait] = {}
        self._keyboard: Optional[EntityId] = None
        self._camera_focus: Optional[EntityId] = None

    # --- Wait ---

    def add_wait(self, entity: EntityId, duration: int):
        """Lock the entity in place for duration frames, replacing any current wait."""
        if duration < 0:
            raise ValueError(f"wait duration must be non-negative, got {duration}")
        self._waits[entity] = Wait(duration=duration)

    def wait_for(self, entity: EntityId) -> Optional[Wait]:
        return self._waits.get(entity)

    def is_waiting(self, entity: EntityId) -> bool:
        return entity in self._waits

    def tick_waits(self) -> List[EntityId]:
        """Advance every wait by one frame and return the entities that may move again."""
        released = []
        for entity, wait in self._waits.items():
            wait.frames_elapsed += 1
            if wait.finished:
                released.append(entity)
        for entity in released:
            del self._waits[entity]
        return released

    # --- Single-holder tags ---

    @property
    def keyboard_holder(self) -> Optional[EntityId]:
        """The keyboard controlled player."""
        return self._keyboard

    @property
    def camera_focus(self) -> Optional[EntityId]:
        """The entity centered in the camera when the scene is rendered."""
        return self._camera_focus

    def assign_keyboard(self, entity: Optional[EntityId]):
        """Give keyboard control to entity, taking it from the previous holder."""
        if self._keyboard is not None and self._keyboard != entity:
            logger.debug("Keyboard control moved from %s to %s", self._keyboard, entity)
        self._keyboard = entity

    def assign_camera_focus(self, entity: Optional[EntityId]):
        """Center the camera on entity, taking focus from the previous holder."""
        self._camera_focus = entity

    def remove_entity(self, entity: EntityId):
        """Drop every marker held by entity."""
        self._waits.pop(entity, None)
        if self._keyboard == entity:
            self._keyboard = None
        if self._camera_focus == entity:
            self._camera_focus = None
