"""EditorWindow — minimal PyQt5 editor with modeless conversion attached."""

from __future__ import annotations

import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication, QMainWindow, QPlainTextEdit

from modeless.app import ModelessApp
from modeless.platform.qt_document import QtDocumentAdapter

logger = logging.getLogger(__name__)


class EditorWindow(QMainWindow):
    def __init__(self, app: ModelessApp, parent=None):
        super().__init__(parent)
        self.app = app
        self.setWindowTitle(app.i18n.t('window_title'))
        self.resize(640, 400)

        self.editor = QPlainTextEdit(self)
        self.setCentralWidget(self.editor)

        self.document = QtDocumentAdapter(self.editor, status_bar=self.statusBar())
        self.controller = app.attach(self.document)
        self.statusBar().showMessage(app.i18n.t(
            'ready',
            convert=self.controller.convert_binding,
            cancel=self.controller.cancel_binding,
        ))

    def closeEvent(self, event):  # noqa: N802 (Qt API)
        self.app.detach(self.document)
        super().closeEvent(event)


def main(argv: list[str] | None = None) -> int:
    from modeless.cli import setup_logging

    parser = argparse.ArgumentParser(prog='modeless-editor')
    parser.add_argument('--config', type=str, default=None, help='Path to config file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--logfile', type=str, default=None, help='Path to log file')
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.logfile)

    qt_app = QApplication(sys.argv[:1])
    window = EditorWindow(ModelessApp(config_path=args.config, debug=args.debug))
    window.show()
    logger.info("Editor started")
    return qt_app.exec_()


if __name__ == '__main__':
    sys.exit(main())
