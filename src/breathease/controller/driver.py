"""
Frame Driver (Qt Timer Loop)
============================
This module contains the QObject that advances the simulation once per frame.

Why is this file needed?
------------------------
1. Timing: The model components only understand ``tick(dt)``. The driver reads
   a clock on every timer shot and turns ``now`` into ``dt``.
2. Single timeline: Every registered component is ticked on the thread that
   owns the driver, in registration order, so the core never sees concurrent
   callers.
3. Signals: Snapshots are published with Qt Signals, which lets views on
   other threads receive them through queued connections.

Classes:
    Tickable: Protocol of anything the driver can advance.
    FrameDriver: QTimer-based frame loop.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol

from PySide6.QtCore import QObject, QTimer, Qt, Signal

from breathease.config import DEFAULT_FPS
from breathease.model.errors import InvalidArgument

logger = logging.getLogger(__name__)


class Tickable(Protocol):
    def tick(self, dt: float) -> Any: ...


class FrameDriver(QObject):
    # Signals for views
    frame_advanced = Signal(float)        # dt of the frame just applied
    snapshots_published = Signal(object)  # {component name: snapshot}
    running_changed = Signal(bool)

    def __init__(
        self,
        fps: int = DEFAULT_FPS,
        clock: Callable[[], float] = time.perf_counter,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if fps <= 0:
            raise InvalidArgument(f"Frame rate must be positive, got {fps}.")
        self.fps = fps
        self._clock = clock
        self._last_time: Optional[float] = None
        self._components: Dict[str, Tickable] = {}
        self._last_snapshots: Dict[str, Any] = {}

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, round(1000 / fps)))
        self._timer.timeout.connect(self._on_timeout)

    # ---- registry
    def add(self, name: str, component: Tickable) -> None:
        if name in self._components:
            raise ValueError(f"Component '{name}' is already registered.")
        self._components[name] = component
        logger.debug(f"Registered component '{name}' ({type(component).__name__}).")

    def remove(self, name: str) -> None:
        self._components.pop(name, None)
        self._last_snapshots.pop(name, None)

    def component(self, name: str) -> Tickable:
        return self._components[name]

    @property
    def snapshots(self) -> Dict[str, Any]:
        """Snapshots published by the most recent frame."""
        return dict(self._last_snapshots)

    # ---- loop control
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if self._timer.isActive():
            return
        self._last_time = self._clock()
        self._timer.start()
        logger.info(f"Frame driver started at {self.fps} fps.")
        self.running_changed.emit(True)

    def stop(self) -> None:
        if not self._timer.isActive():
            return
        self._timer.stop()
        self._last_time = None
        logger.info("Frame driver stopped.")
        self.running_changed.emit(False)

    # ---- frames
    def tick(self, now: float) -> Dict[str, Any]:
        """
        Advance to the wall-clock time ``now``.

        The first call after ``start`` (or ever) only records the time.
        """
        dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now
        return self.step(dt)

    def step(self, dt: float) -> Dict[str, Any]:
        """
        Tick every component by ``dt`` and publish the resulting snapshots.

        Returns:
            Mapping of component name to the snapshot its ``tick`` returned.
        """
        snapshots = {name: component.tick(dt) for name, component in self._components.items()}
        self._last_snapshots = snapshots
        self.frame_advanced.emit(dt)
        self.snapshots_published.emit(dict(snapshots))
        return snapshots

    def _on_timeout(self) -> None:
        self.tick(self._clock())
