import logging
import os
import sys

QUIET_LOGGERS = ('googleapiclient', 'google_auth_oauthlib', 'urllib3', 'PyQt6')


class _ConsoleNoiseFilter(logging.Filter):
    """Let our own logs through; third-party libraries only at WARNING and above."""

    def filter(self, record):
        if record.name == 'pomocal' or record.name.startswith('pomocal.') or record.name == '__main__':
            return True
        if record.name == 'py.warnings':
            return record.levelno >= logging.ERROR
        return record.levelno >= logging.WARNING


def setup_logging(log_dir='config', console_level=logging.INFO, file_level=logging.DEBUG):
    """Configure console and file logging. Call once, before the first log line."""
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'pomocal.log')

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)

    logging.captureWarnings(True)
