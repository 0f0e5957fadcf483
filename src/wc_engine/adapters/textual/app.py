"""Executable Textual app showing live word counts for an edited buffer."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use wc_engine.adapters.textual.app"
    ) from exc

from wc_engine.config import WordCountConfig
from wc_engine.host import WordCountService

from .controller import WordCountStatusController, WordCountUIHooks

Location = Tuple[int, int]


def offset_for_location(text: str, location: Location) -> int:
    """Translate a ``(row, column)`` location into a character offset."""

    row, col = location
    lines = text.splitlines(keepends=True)
    offset = sum(len(line) for line in lines[:row])
    return offset + col


class WordCountApp(App[None]):
    """Text area with document and selection counts in the status row."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-row {
		height: 1;
		background: $surface-darken-1;
	}

	#message-line, #selection-status, #document-status {
		width: auto;
		padding: 0 1;
	}

	#message-line {
		width: 1fr;
	}
	"""

    BINDINGS = [
        ("ctrl+d", "toggle_document", "Toggle document count"),
        ("ctrl+e", "toggle_selection", "Toggle selection count"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        path: Optional[Path] = None,
        config: Optional[WordCountConfig] = None,
    ) -> None:
        super().__init__()
        self._path = path
        self._doc_id = str(path) if path else "untitled"
        self._config = config or WordCountConfig()
        self.controller: WordCountStatusController | None = None
        self._editor: TextArea | None = None
        self._message_widget: Static | None = None
        self._selection_widget: Static | None = None
        self._document_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        initial = self._path.read_text(encoding="utf-8") if self._path else ""
        self._editor = TextArea(initial, id="editor")
        yield self._editor
        with Horizontal(id="status-row"):
            self._message_widget = Static("", id="message-line")
            self._selection_widget = Static("", id="selection-status")
            self._document_widget = Static("", id="document-status")
            yield self._message_widget
            yield self._selection_widget
            yield self._document_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = WordCountUIHooks(
            update_document_status=self._update_document_status,
            update_selection_status=self._update_selection_status,
            show_message=self._show_message,
        )
        self.controller = WordCountStatusController(
            WordCountService(self._config), hooks
        )
        text = self._editor.text if self._editor else ""
        self.controller.open_document(self._doc_id, text)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.controller:
            self.controller.change_document(self._doc_id, event.text_area.text)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if not self.controller:
            return
        text = event.text_area.text
        start = offset_for_location(text, event.selection.start)
        end = offset_for_location(text, event.selection.end)
        self.controller.select(self._doc_id, [(start, end)])

    def action_toggle_document(self) -> None:
        if self.controller:
            self.controller.toggle_document()

    def action_toggle_selection(self) -> None:
        if self.controller:
            self.controller.toggle_selection()

    def _update_document_status(self, status: Optional[str]) -> None:
        if self._document_widget:
            self._document_widget.update(status or "")
            self._document_widget.display = status is not None

    def _update_selection_status(self, status: Optional[str]) -> None:
        if self._selection_widget:
            self._selection_widget.update(status or "")
            self._selection_widget.display = status is not None

    def _show_message(self, message: str) -> None:
        if self._message_widget:
            self._message_widget.update(message)
        self.notify(message, severity="error")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the word-count Textual demo.")
    parser.add_argument("path", nargs="?", type=Path, help="File to open")
    parser.add_argument(
        "--count-mode",
        choices=("character", "byte"),
        default=None,
        help="Report characters or encoded bytes (default: WC_ENGINE_CHARACTER_COUNT)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Cross-check every incremental update against a full count",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = WordCountConfig.from_env()
    overrides = {}
    if args.count_mode:
        overrides["count_mode"] = args.count_mode
    if args.debug:
        overrides["debug"] = True
    if overrides:
        config = WordCountConfig.from_mapping(
            {"white_space": config.white_space, "new_line": config.new_line, **overrides},
            base=config,
        )
    WordCountApp(path=args.path, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
