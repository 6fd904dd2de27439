from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from .errors import ClipboardError
from .machine import (
    ClearFileInput,
    CopyFailed,
    CopyRequested,
    CopySucceeded,
    CopyToClipboard,
    Effect,
    Event,
    FileChosen,
    FileRemoved,
    FormEdited,
    ResetRequested,
    SaveLinkRequested,
    StartUpload,
    SubmitRequested,
    UploadFailed,
    UploadSucceeded,
    transition,
)
from .models import MAX_FILE_SIZE, SelectedFile, UploadRequest, WorkflowState
from .pipeline import DEFAULT_CACHE_CONTROL_SECONDS, run_upload
from .ports import MetadataStore, ObjectStore
from .result import Err


logger = logging.getLogger(__name__)

Listener = Callable[[WorkflowState], None]
Copier = Callable[[str], None]


class UploadController:
    """One upload session: owns the workflow state and runs its effects.

    Built once per page session and cleared with :meth:`reset`. ``copiers`` are tried in
    order when the link is copied (selection-based copy first, clipboard API
    second); a copier signals failure by raising.
    """

    def __init__(
        self,
        storage: ObjectStore,
        metadata: MetadataStore,
        *,
        copiers: Sequence[Copier] = (),
        max_file_size: int = MAX_FILE_SIZE,
        cache_control_seconds: int = DEFAULT_CACHE_CONTROL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.storage = storage
        self.metadata = metadata
        self.copiers = list(copiers)
        self.max_file_size = max_file_size
        self.cache_control_seconds = cache_control_seconds
        self.clock = clock
        self.state = WorkflowState()
        # Bumped whenever the file picker has to be emptied.
        self.input_epoch = 0
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns the unsubscribe hook.

        For push-style renderers and tests. The Streamlit page does not
        subscribe since it re-reads :attr:`state` on every script run.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: Event) -> List[Effect]:
        """Apply one event; return the effects that still need awaiting."""
        previous = self.state
        self.state, effects = transition(self.state, event)
        if self.state is not previous:
            if self.state.phase is not previous.phase:
                logger.debug(
                    "phase_changed",
                    extra={"from_phase": previous.phase.value, "to_phase": self.state.phase.value},
                )
            for listener in list(self._listeners):
                listener(self.state)

        pending: List[Effect] = []
        for effect in effects:
            if isinstance(effect, ClearFileInput):
                self.input_epoch += 1
            elif isinstance(effect, CopyToClipboard):
                self._copy(effect.text)
            else:
                pending.append(effect)
        return pending

    # Page events

    def choose_file(self, name: str, media_type: Optional[str], data: bytes) -> WorkflowState:
        chosen = SelectedFile(name=name, media_type=media_type or "", size=len(data), data=data)
        self.dispatch(FileChosen(chosen, max_size=self.max_file_size))
        return self.state

    def remove_file(self) -> WorkflowState:
        self.dispatch(FileRemoved())
        return self.state

    def edit_form(
        self,
        name: Optional[str] = None,
        year: Optional[str] = None,
        type: Optional[str] = None,
    ) -> WorkflowState:
        self.dispatch(FormEdited(name=name, year=year, type=type))
        return self.state

    async def submit(self) -> WorkflowState:
        for effect in self.dispatch(SubmitRequested(timestamp_ms=int(self.clock() * 1000))):
            if isinstance(effect, StartUpload):
                await self._upload(effect.request)
        return self.state

    def copy_link(self) -> WorkflowState:
        self.dispatch(CopyRequested())
        return self.state

    def save_link(self) -> WorkflowState:
        self.dispatch(SaveLinkRequested(now=self.clock()))
        return self.state

    def reset(self) -> WorkflowState:
        self.dispatch(ResetRequested())
        return self.state

    # Effects

    async def _upload(self, request: UploadRequest) -> None:
        outcome = await run_upload(request, self.storage, self.metadata, self.cache_control_seconds)
        if isinstance(outcome, Err):
            logger.info("upload_failed", extra={"kind": outcome.error.kind, "error": outcome.error.message})
            self.dispatch(UploadFailed(outcome.error))
        else:
            self.dispatch(UploadSucceeded(stored=outcome.value.stored, record=outcome.value.record))

    def _copy(self, text: str) -> None:
        for copier in self.copiers:
            try:
                copier(text)
            except Exception:
                logger.debug("copy_strategy_failed", exc_info=True)
                continue
            self.dispatch(CopySucceeded(now=self.clock()))
            return
        self.dispatch(CopyFailed(ClipboardError("Failed to copy link.")))
