import logging
from unittest.mock import patch

from ticket_panel.logging import setup_logging


def test_setup_logging_creates_session_file(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    log_dir = tmp_path / "logs"

    with patch("discord.utils.setup_logging") as mock_setup:
        log_file = setup_logging(logging.DEBUG, log_dir=log_dir)

    try:
        mock_setup.assert_called_once_with(level=logging.DEBUG, root=True)
        assert log_file.exists()
        assert log_file.parent == log_dir
        assert log_file.name.startswith("tickets_")
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers if h not in before)
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
            handler.close()
