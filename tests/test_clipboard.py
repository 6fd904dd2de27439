import json

import pytest

from apps.ui.clipboard import BrowserClipboard
from packages.upload.controller import UploadController
from packages.upload.models import Phase


async def _uploaded(storage, metadata) -> tuple:
    clipboard = BrowserClipboard()
    controller = UploadController(
        storage,
        metadata,
        copiers=[clipboard.selection_copy, clipboard.clipboard_write],
        clock=lambda: 1718000000.0,
    )
    controller.choose_file("Report.pdf", "application/pdf", b"%PDF-1.4 body")
    controller.edit_form(year="1", type="exam")
    await controller.submit()
    return clipboard, controller


def test_script_embeds_escaped_link() -> None:
    url = 'https://cdn.test/pdfs/1-a"b.pdf'
    script = BrowserClipboard().script(url)
    assert json.dumps(url) in script
    assert "__TEXT__" not in script


@pytest.mark.asyncio
@pytest.mark.parametrize("report", ["selection", "clipboard"])
async def test_browser_reported_copy_confirms(storage, metadata, report) -> None:
    clipboard, controller = await _uploaded(storage, metadata)
    clipboard.report = report

    state = controller.copy_link()

    assert state.phase is Phase.SUCCESS
    assert state.copy_confirmed(controller.clock())


@pytest.mark.asyncio
@pytest.mark.parametrize("report", ["failed", None, "unexpected"])
async def test_browser_reported_failure_shows_error(storage, metadata, report) -> None:
    clipboard, controller = await _uploaded(storage, metadata)
    url = controller.state.public_url
    clipboard.report = report

    state = controller.copy_link()

    assert state.phase is Phase.ERROR
    assert state.error.message == "Failed to copy link."
    assert state.public_url == url
    assert not state.copy_confirmed(controller.clock())
