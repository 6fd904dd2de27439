from __future__ import annotations

import json
from typing import Optional


SELECTION = "selection"
CLIPBOARD_API = "clipboard"

# Evaluated in the page; resolves to the strategy that worked, or "failed".
_COPY_SCRIPT = """(async () => {
  const text = __TEXT__;
  const doc = window.parent.document;
  const area = doc.createElement("textarea");
  area.value = text;
  doc.body.appendChild(area);
  area.select();
  area.setSelectionRange(0, 99999);
  let copied = false;
  try { copied = doc.execCommand("copy"); } catch (e) { copied = false; }
  area.remove();
  if (copied) { return "selection"; }
  try {
    await window.parent.navigator.clipboard.writeText(text);
    return "clipboard";
  } catch (e) {
    return "failed";
  }
})()"""


class ClipboardUnavailable(Exception):
    pass


class BrowserClipboard:
    """Copiers backed by the outcome the browser reported for the last copy.

    The page runs :meth:`script` and stores what it resolved to in ``report``
    before the controller tries ``selection_copy`` then ``clipboard_write``.
    """

    def __init__(self) -> None:
        self.report: Optional[str] = None

    def script(self, text: str) -> str:
        return _COPY_SCRIPT.replace("__TEXT__", json.dumps(text))

    def selection_copy(self, text: str) -> None:
        self._expect(SELECTION)

    def clipboard_write(self, text: str) -> None:
        self._expect(CLIPBOARD_API)

    def _expect(self, strategy: str) -> None:
        if self.report != strategy:
            raise ClipboardUnavailable(f"{strategy} copy did not succeed (browser reported {self.report!r})")
