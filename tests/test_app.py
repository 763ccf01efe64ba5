import logging

from buzzwall.main import create_app


def test_create_app_leaves_root_handlers_alone(settings):
    root = logging.getLogger()
    marker = logging.NullHandler()
    root.addHandler(marker)
    try:
        create_app(settings=settings)
        assert marker in root.handlers
    finally:
        root.removeHandler(marker)
