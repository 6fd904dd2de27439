"""Pure transitions of the upload form.

Every handler takes the current ``WorkflowState`` and one event and returns
the next state together with the effects the controller has to carry out.
Nothing here touches the network, the clock or the page.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple, Type, Union

from .errors import ClipboardError, UploadError, ValidationError
from .models import (
    CONFIRMATION_SECONDS,
    MAX_FILE_SIZE,
    MetadataRecord,
    Phase,
    SelectedFile,
    StoredObject,
    UploadForm,
    UploadRequest,
    WorkflowState,
)
from .result import Err
from .validation import build_storage_path, strip_pdf_suffix, validate_file, validate_submission


# Events


@dataclass(frozen=True)
class FileChosen:
    file: SelectedFile
    max_size: int = MAX_FILE_SIZE


@dataclass(frozen=True)
class FileRemoved:
    pass


@dataclass(frozen=True)
class FormEdited:
    name: Optional[str] = None
    year: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class SubmitRequested:
    timestamp_ms: int


@dataclass(frozen=True)
class UploadSucceeded:
    stored: StoredObject
    record: MetadataRecord


@dataclass(frozen=True)
class UploadFailed:
    error: UploadError


@dataclass(frozen=True)
class CopyRequested:
    pass


@dataclass(frozen=True)
class CopySucceeded:
    now: float


@dataclass(frozen=True)
class CopyFailed:
    error: ClipboardError


@dataclass(frozen=True)
class SaveLinkRequested:
    now: float


@dataclass(frozen=True)
class ResetRequested:
    pass


Event = Union[
    FileChosen,
    FileRemoved,
    FormEdited,
    SubmitRequested,
    UploadSucceeded,
    UploadFailed,
    CopyRequested,
    CopySucceeded,
    CopyFailed,
    SaveLinkRequested,
    ResetRequested,
]


# Effects


@dataclass(frozen=True)
class StartUpload:
    request: UploadRequest


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class ClearFileInput:
    pass


Effect = Union[StartUpload, CopyToClipboard, ClearFileInput]
Transition = Tuple[WorkflowState, List[Effect]]


def _fail(state: WorkflowState, error: UploadError) -> WorkflowState:
    return replace(state, phase=Phase.ERROR, error=error, public_url=None)


def on_file_chosen(state: WorkflowState, event: FileChosen) -> Transition:
    if state.phase is Phase.LOADING:
        return state, []
    checked = validate_file(event.file, event.max_size)
    if isinstance(checked, Err):
        # The previous selection, if any, stays in place.
        return _fail(state, checked.error), []
    chosen = checked.value
    form = replace(state.form, name=strip_pdf_suffix(chosen.name))
    return (
        replace(state, phase=Phase.FILE_SELECTED, file=chosen, form=form, error=None, public_url=None),
        [],
    )


def on_file_removed(state: WorkflowState, event: FileRemoved) -> Transition:
    if state.phase is Phase.LOADING:
        return state, []
    cleared = replace(
        state,
        phase=Phase.IDLE,
        file=None,
        form=UploadForm(),
        error=None,
        public_url=None,
    )
    return cleared, [ClearFileInput()]


def on_form_edited(state: WorkflowState, event: FormEdited) -> Transition:
    if state.phase is Phase.LOADING:
        return state, []
    form = state.form
    if event.name is not None:
        form = replace(form, name=event.name)
    if event.year is not None:
        form = replace(form, year=event.year)
    if event.type is not None:
        form = replace(form, type=event.type)
    return replace(state, form=form), []


def on_submit(state: WorkflowState, event: SubmitRequested) -> Transition:
    if state.phase is Phase.LOADING:
        return state, []
    checked = validate_submission(state.file, state.form)
    if isinstance(checked, Err):
        return _fail(state, checked.error), []
    fields = checked.value
    request = UploadRequest(
        file=fields.file,
        path=build_storage_path(event.timestamp_ms, fields.file.name),
        name=fields.name,
        year=fields.year,
        type=fields.type,
    )
    loading = replace(state, phase=Phase.LOADING, error=None, public_url=None)
    return loading, [StartUpload(request)]


def on_upload_succeeded(state: WorkflowState, event: UploadSucceeded) -> Transition:
    if state.phase is not Phase.LOADING:
        return state, []
    done = replace(
        state,
        phase=Phase.SUCCESS,
        public_url=event.stored.public_url,
        current_upload_id=event.record.id,
        error=None,
    )
    return done, []


def on_upload_failed(state: WorkflowState, event: UploadFailed) -> Transition:
    if state.phase is not Phase.LOADING:
        return state, []
    return _fail(state, event.error), []


def on_copy_requested(state: WorkflowState, event: CopyRequested) -> Transition:
    if state.phase is not Phase.SUCCESS or not state.public_url:
        return state, []
    return state, [CopyToClipboard(state.public_url)]


def on_copy_succeeded(state: WorkflowState, event: CopySucceeded) -> Transition:
    return replace(state, copied_until=event.now + CONFIRMATION_SECONDS), []


def on_copy_failed(state: WorkflowState, event: CopyFailed) -> Transition:
    # The upload itself succeeded, so the link stays available.
    return replace(state, phase=Phase.ERROR, error=event.error), []


def on_save_link(state: WorkflowState, event: SaveLinkRequested) -> Transition:
    if not state.public_url:
        return _fail(state, ValidationError("No link available.")), []
    if state.save_acknowledged(event.now):
        return state, []
    return replace(state, saved_until=event.now + CONFIRMATION_SECONDS), []


def on_reset(state: WorkflowState, event: ResetRequested) -> Transition:
    return WorkflowState(), [ClearFileInput()]


HANDLERS: Dict[Type, Callable[[WorkflowState, object], Transition]] = {
    FileChosen: on_file_chosen,
    FileRemoved: on_file_removed,
    FormEdited: on_form_edited,
    SubmitRequested: on_submit,
    UploadSucceeded: on_upload_succeeded,
    UploadFailed: on_upload_failed,
    CopyRequested: on_copy_requested,
    CopySucceeded: on_copy_succeeded,
    CopyFailed: on_copy_failed,
    SaveLinkRequested: on_save_link,
    ResetRequested: on_reset,
}


def transition(state: WorkflowState, event: Event) -> Transition:
    try:
        handler = HANDLERS[type(event)]
    except KeyError:
        raise TypeError(f"unsupported event: {event!r}") from None
    return handler(state, event)
