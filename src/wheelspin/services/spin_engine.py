"""
Spin engine for the WheelSpin package.

This module holds the state machine that runs a wheel spin. It coordinates
the section partitioner, the rotation draw, the feedback side channel and
the resolver, and reports the chosen item through a completion callback.

Classes:
    SpinEngine: Multi-stage spin state machine driven by a scheduler
"""

import logging
import random
from typing import Callable, List, Optional, Sequence, Tuple

from ..config import WheelSettings
from ..models.item import SelectableItem
from ..models.section import WheelSection
from ..models.spin_state import SpinPhase, SpinResult, SpinState
from ..utils import log_event
from .feedback_service import FeedbackKind, FeedbackService, LoggingFeedbackService
from .item_source import ItemSource
from .partition_service import partition
from .resolver_service import (
    RandomSource,
    draw_rotation,
    effective_angle,
    normalize_angle,
    section_index,
)
from .scheduler_service import ManualScheduler, ScheduledCall, Scheduler

logger = logging.getLogger(__name__)

SpinCompletion = Callable[[SelectableItem], None]


class SpinEngine:
    """
    Runs wheel spins and resolves each one to exactly one item.

    A spin walks ``IDLE -> WIND_UP -> SPINNING -> RESOLVED -> IDLE``. Every
    transition is a scheduler callback, so ``spin()`` returns immediately
    and the phases follow strictly one after another.

    Only one spin can be in flight. ``spin()`` while busy, or with no
    sections, is a silent no-op. There is no way to end a spin early; a
    host that goes away calls :meth:`reset` and the interrupted spin simply
    never resolves.

    Attributes:
        settings: Timing and rotation settings
        scheduler: Source of delayed callbacks
        feedback: Sink for haptic/audio pulses
        item_source: Optional injected source of items

    Example:
        >>> scheduler = ManualScheduler()
        >>> engine = SpinEngine(scheduler=scheduler)
        >>> engine.update_sections([SelectableItem(id="1", label="Hike"),
        ...                         SelectableItem(id="2", label="Bake")])
        >>> picked = []
        >>> engine.spin(picked.append)
        True
        >>> _ = scheduler.run_until_idle()
        >>> picked[0].label in ("Hike", "Bake")
        True
    """

    def __init__(
        self,
        item_source: Optional[ItemSource] = None,
        scheduler: Optional[Scheduler] = None,
        feedback: Optional[FeedbackService] = None,
        settings: Optional[WheelSettings] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize the spin engine.

        Creates default collaborators when they are not injected. With an
        item source the engine partitions its items right away and again
        after every change the source reports.

        Args:
            item_source: Optional source of the wheel's items
            scheduler: Optional scheduler, defaults to a ManualScheduler
            feedback: Optional feedback sink, defaults to logging
            settings: Optional settings, defaults to environment settings
            rng: Optional random source, defaults to SystemRandom
        """
        self.settings = settings or WheelSettings.from_env()
        self.scheduler = scheduler or ManualScheduler()
        self.feedback = feedback or LoggingFeedbackService()
        self.item_source = item_source
        self._rng: RandomSource = rng or random.SystemRandom()

        self._state = SpinState()
        self._sections: Tuple[WheelSection, ...] = ()
        self._pending: List[ScheduledCall] = []
        self._generation = 0
        self._completion: Optional[SpinCompletion] = None
        self._draw: Tuple[int, float, float] = (0, 0.0, 0.0)
        self._last_result: Optional[SpinResult] = None

        if self.item_source is not None:
            self.item_source.subscribe(self._on_items_changed)
            self.update_sections()

    @property
    def state(self) -> SpinState:
        """Copy of the current spin state for rendering."""
        return self._state.model_copy()

    @property
    def sections(self) -> Tuple[WheelSection, ...]:
        return self._sections

    @property
    def is_spinning(self) -> bool:
        return self._state.phase != SpinPhase.IDLE

    @property
    def last_result(self) -> Optional[SpinResult]:
        return self._last_result

    def update_sections(self, items: Optional[Sequence[SelectableItem]] = None) -> None:
        """
        Rebuild the partition from ``items`` or from the item source.

        Safe to call at any time, including mid-spin. The new partition
        replaces the old one as a whole; a spin in flight resolves against
        whatever partition exists when it lands.

        Args:
            items: Items to place on the wheel; read from the item source
                when omitted
        """
        if items is None:
            items = self.item_source.list_items() if self.item_source is not None else []

        self._sections = tuple(partition(items, self.settings.palette))

        log_event(
            logger,
            "SECTIONS_UPDATED",
            logging.DEBUG,
            sections=len(self._sections),
            phase=self._state.phase.value,
        )

    def spin(self, completion: SpinCompletion) -> bool:
        """
        Start a spin if the wheel is idle and has sections.

        Args:
            completion: Called exactly once with the selected item when the
                spin resolves

        Returns:
            True if the spin started, False if the request was ignored
        """
        if self._state.phase != SpinPhase.IDLE:
            log_event(logger, "SPIN_REJECTED", reason="busy", phase=self._state.phase.value)
            return False

        if self.item_source is not None:
            self.update_sections()

        if not self._sections:
            log_event(logger, "SPIN_REJECTED", reason="no_sections")
            return False

        self._generation += 1
        self._pending = []
        self._completion = completion
        self._state.selected_item = None
        self._state.phase = SpinPhase.WIND_UP

        log_event(
            logger,
            "SPIN_STARTED",
            spin=self._generation,
            sections=len(self._sections),
            rotation_angle=self._state.rotation_angle,
        )

        self._emit_feedback(FeedbackKind.PREPARE)
        self._start_wind_up(self._generation)
        return True

    def reset(self) -> None:
        """
        Abandon any spin in flight and return to idle.

        Pending timers are cancelled and late callbacks are ignored, so the
        abandoned spin never calls its completion. The accumulated rotation
        is kept so the wheel does not jump.
        """
        was_spinning = self.is_spinning

        for call in self._pending:
            call.cancel()
        self._pending = []
        self._generation += 1
        self._completion = None

        self._state.phase = SpinPhase.IDLE
        self._state.pointer_wobble = 0.0
        self._state.spin_velocity = 0.0

        if was_spinning:
            log_event(logger, "SPIN_ABANDONED", reason="reset")

    def close(self) -> None:
        """Detach from the item source and drop any spin in flight."""
        if self.item_source is not None:
            self.item_source.unsubscribe(self._on_items_changed)
        self.reset()

    def _on_items_changed(self, items: List[SelectableItem]) -> None:
        self.update_sections(items)

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending.append(self.scheduler.call_later(delay, callback))

    def _is_current(self, generation: int, phase: SpinPhase) -> bool:
        return generation == self._generation and self._state.phase == phase

    def _start_wind_up(self, generation: int) -> None:
        interval = self.settings.wobble_interval

        for step in range(self.settings.wobble_count):
            self._schedule(step * interval, lambda s=step: self._wobble(generation, s))

        self._schedule(self.settings.wind_up_duration, lambda: self._start_spinning(generation))

    def _wobble(self, generation: int, step: int) -> None:
        if not self._is_current(generation, SpinPhase.WIND_UP):
            return

        if step % 2 == 0:
            self._state.pointer_wobble = self.settings.wobble_amplitude
            self._emit_feedback(FeedbackKind.IMPACT)
        else:
            self._state.pointer_wobble = 0.0

    def _start_spinning(self, generation: int) -> None:
        if not self._is_current(generation, SpinPhase.WIND_UP):
            return

        self._pending = [call for call in self._pending if not call.cancelled]
        self._state.pointer_wobble = 0.0
        self._state.phase = SpinPhase.SPINNING

        full_rotations, final_offset = draw_rotation(
            self._rng, self.settings.min_full_rotations, self.settings.max_full_rotations
        )
        total_rotation = full_rotations * 360 + final_offset
        self._draw = (full_rotations, final_offset, total_rotation)

        self._state.rotation_angle += total_rotation
        self._state.spin_velocity = total_rotation / self.settings.spin_duration

        for i in range(self.settings.pulse_count):
            self._schedule(i * self.settings.pulse_interval, lambda: self._pulse(generation))

        self._schedule(self.settings.resolve_delay, lambda: self._resolve(generation))

    def _pulse(self, generation: int) -> None:
        if self._is_current(generation, SpinPhase.SPINNING):
            self._emit_feedback(FeedbackKind.IMPACT)

    def _resolve(self, generation: int) -> None:
        if not self._is_current(generation, SpinPhase.SPINNING):
            return

        completion = self._completion
        self._completion = None
        self._pending = []
        self._state.phase = SpinPhase.RESOLVED

        sections = self._sections
        if not sections:
            log_event(logger, "SPIN_ABANDONED", logging.WARNING, reason="no_sections")
            self._finish()
            return

        rotation = self._state.rotation_angle
        index = section_index(rotation, len(sections))
        item = sections[index].item
        full_rotations, final_offset, total_rotation = self._draw

        self._last_result = SpinResult(
            item=item,
            section_index=index,
            full_rotations=full_rotations,
            final_offset=final_offset,
            total_rotation=total_rotation,
            rotation_angle=rotation,
            normalized_angle=normalize_angle(rotation),
            effective_angle=effective_angle(rotation),
        )
        self._state.selected_item = item
        self._state.spin_count += 1

        log_event(
            logger,
            "SPIN_RESOLVED",
            spin=generation,
            item_id=item.id,
            section_index=index,
            sections=len(sections),
            total_rotation=round(total_rotation, 3),
            effective_angle=round(self._last_result.effective_angle, 3),
        )

        self._emit_feedback(FeedbackKind.SUCCESS)

        try:
            if completion is not None:
                completion(item)
        finally:
            self._finish()

    def _finish(self) -> None:
        self._state.phase = SpinPhase.IDLE
        self._state.spin_velocity = 0.0
        self._state.pointer_wobble = 0.0

    def _emit_feedback(self, kind: FeedbackKind) -> None:
        try:
            self.feedback.emit(kind)
        except Exception as e:
            logger.warning("Feedback pulse %s failed: %s", kind.value, e)
