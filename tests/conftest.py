import logging
import os
import sys

import pytest

# Make the package importable when running from a checkout without install
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Qt tests run without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


@pytest.fixture(autouse=True)
def english_locale(monkeypatch):
    """Pin auto-detected messages to English regardless of the host LANG."""
    monkeypatch.setenv('LANG', 'C')


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """setup_logging() caches its logger; drop handlers bound to old tmp paths and captured streams."""
    yield
    from modeless import cli

    root = logging.getLogger('modeless')
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    cli.logger = None
