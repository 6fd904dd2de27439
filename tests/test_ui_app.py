import asyncio
from pathlib import Path

from streamlit.testing.v1 import AppTest

from packages.upload.controller import UploadController
from packages.upload.models import Phase

APP_PATH = Path(__file__).resolve().parents[1] / "apps" / "ui" / "app.py"


class Clock:
    def __init__(self, now: float = 1718000000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _page(storage, metadata, clock: Clock) -> AppTest:
    controller = UploadController(storage, metadata, clock=clock)
    controller.choose_file("Report.pdf", "application/pdf", b"%PDF-1.4 body")
    controller.edit_form(year="1", type="exam")
    asyncio.run(controller.submit())
    assert controller.state.phase is Phase.SUCCESS

    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.session_state["upload_controller"] = controller
    at.run()
    assert not at.exception
    return at


def test_save_link_button_comes_back_after_window(storage, metadata) -> None:
    clock = Clock()
    at = _page(storage, metadata, clock)
    assert at.button(key="save_link").label == "Save link"

    at.button(key="save_link").click().run()
    saved = at.button(key="save_link")
    assert saved.label == "Link already saved!"
    assert saved.disabled

    clock.now += 2.5
    at.run()
    saved = at.button(key="save_link")
    assert saved.label == "Save link"
    assert not saved.disabled


def test_copy_waits_for_browser_report(storage, metadata) -> None:
    at = _page(storage, metadata, Clock())

    at.button(key="copy_link").click().run()

    assert not at.exception
    assert at.button(key="copy_link").label == "Copy link"
    assert any(caption.value == "Copying..." for caption in at.caption)
    assert at.session_state["upload_controller"].state.phase is Phase.SUCCESS
