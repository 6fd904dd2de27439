from __future__ import annotations

import asyncio

import streamlit as st
from streamlit_js_eval import streamlit_js_eval

from apps.ui.clipboard import BrowserClipboard
from packages.backends.metadata_api import ApiMetadataStore
from packages.backends.s3 import S3ObjectStore
from packages.common.config import get_settings
from packages.common.logging import setup_json_logging
from packages.upload.controller import UploadController
from packages.upload.models import Panel
from packages.upload.validation import format_file_size


settings = get_settings()
setup_json_logging(settings.log_level)

st.set_page_config(page_title=settings.app_name, layout="centered")
st.title(settings.app_name)

NAME_KEY = "custom_name"
YEAR_KEY = "year_select"
TYPE_KEY = "type_select"
COPY_REQUEST_KEY = "copy_request"


def get_clipboard() -> BrowserClipboard:
    if "browser_clipboard" not in st.session_state:
        st.session_state.browser_clipboard = BrowserClipboard()
    return st.session_state.browser_clipboard


def get_controller() -> UploadController:
    if "upload_controller" not in st.session_state:
        clipboard = get_clipboard()
        st.session_state.upload_controller = UploadController(
            S3ObjectStore.from_settings(settings),
            ApiMetadataStore(settings.api_base_url),
            copiers=[clipboard.selection_copy, clipboard.clipboard_write],
            max_file_size=settings.max_upload_bytes,
            cache_control_seconds=settings.cache_control_seconds,
        )
    return st.session_state.upload_controller


controller = get_controller()
clipboard = get_clipboard()


def sync_form_widgets() -> None:
    form = controller.state.form
    st.session_state[NAME_KEY] = form.name
    st.session_state[YEAR_KEY] = form.year
    st.session_state[TYPE_KEY] = form.type


def on_file_chosen() -> None:
    uploaded = st.session_state.get(f"pdf_input_{controller.input_epoch}")
    if uploaded is None:
        return
    controller.choose_file(uploaded.name, uploaded.type, uploaded.getvalue())
    sync_form_widgets()


def on_remove() -> None:
    controller.remove_file()
    sync_form_widgets()


def on_form_edited() -> None:
    controller.edit_form(
        name=st.session_state.get(NAME_KEY, ""),
        year=st.session_state.get(YEAR_KEY, ""),
        type=st.session_state.get(TYPE_KEY, ""),
    )


def on_copy() -> None:
    st.session_state[COPY_REQUEST_KEY] = st.session_state.get(COPY_REQUEST_KEY, 0) + 1


def on_reset() -> None:
    st.session_state.pop(COPY_REQUEST_KEY, None)
    controller.reset()
    sync_form_widgets()


def year_label(value: str) -> str:
    return "Select the grade/series" if not value else f"Grade {value}"


def type_label(value: str) -> str:
    return "Select the type" if not value else value.capitalize()


def confirmation_showing() -> bool:
    now = controller.clock()
    return controller.state.copy_confirmed(now) or controller.state.save_acknowledged(now)


@st.fragment(run_every=1.0)
def expire_confirmations() -> None:
    # Only rendered while a confirmation is up; redraws the page once it lapses.
    if not confirmation_showing():
        st.rerun()


def run_pending_copy(url: str) -> None:
    request = st.session_state.get(COPY_REQUEST_KEY)
    if request is None:
        return
    report = streamlit_js_eval(js_expressions=clipboard.script(url), key=f"copy_link_{request}")
    if report is None:
        st.caption("Copying...")
        return
    st.session_state.pop(COPY_REQUEST_KEY, None)
    clipboard.report = report
    controller.copy_link()
    st.rerun()


state = controller.state
panels = state.visible_panels

# Drop zone / file info
if Panel.DROP_ZONE in panels:
    st.file_uploader(
        "Drag and drop a PDF here, or click to choose one",
        key=f"pdf_input_{controller.input_epoch}",
        on_change=on_file_chosen,
        help=f"PDF only, up to {format_file_size(settings.max_upload_bytes)}",
    )
elif state.file is not None:
    with st.container(border=True):
        left, right = st.columns([4, 1])
        left.markdown(f"**{state.file.name}**")
        left.caption(format_file_size(state.file.size))
        right.button("Remove", on_click=on_remove, disabled=not state.submit_enabled)

# Metadata form
st.text_input("File name", key=NAME_KEY, on_change=on_form_edited)
st.selectbox(
    "Grade/series",
    [""] + [str(y) for y in settings.year_options],
    key=YEAR_KEY,
    format_func=year_label,
    on_change=on_form_edited,
)
st.selectbox(
    "Type",
    [""] + list(settings.type_options),
    key=TYPE_KEY,
    format_func=type_label,
    on_change=on_form_edited,
)

if st.button("Upload", type="primary", disabled=not state.submit_enabled):
    with st.spinner("Uploading..."):
        asyncio.run(controller.submit())
    state = controller.state
    panels = state.visible_panels

# Status region
now = controller.clock()
if Panel.LOADING in panels:
    st.info("Uploading...")
elif Panel.SUCCESS in panels:
    st.success("File uploaded successfully!")
    st.text_input("Public link", value=state.public_url or "", disabled=True)
    copy_col, save_col, again_col = st.columns(3)
    copy_col.button(
        "Copied!" if state.copy_confirmed(now) else "Copy link",
        key="copy_link",
        on_click=on_copy,
    )
    save_col.button(
        "Link already saved!" if state.save_acknowledged(now) else "Save link",
        key="save_link",
        on_click=controller.save_link,
        disabled=state.save_acknowledged(now),
    )
    again_col.button("Upload another file", key="upload_another", on_click=on_reset)
    run_pending_copy(state.public_url or "")
elif Panel.ERROR in panels:
    st.error(state.error.message if state.error else "Failed to upload the file.")
    st.button("Start over", key="start_over", on_click=on_reset)

if confirmation_showing():
    expire_confirmations()
