import logging
from pathlib import Path

from lens_inventory.utils_logging import configure_logging


def test_configure_logging_is_idempotent(tmp_path: Path):
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        log_file = configure_logging(tmp_path / "logs", debug=True)
        configure_logging(tmp_path / "logs")
        assert log_file == tmp_path / "logs" / "run.log"
        assert log_file.exists()
        added = [h for h in root.handlers if h not in before]
        assert sum(isinstance(h, logging.FileHandler) for h in added) == 1
        assert root.level == logging.INFO
        assert logging.getLogger("matplotlib").level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
            handler.close()
