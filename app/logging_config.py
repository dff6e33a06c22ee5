import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure root logging for the API process.

    Call once, before the app starts serving. Under gunicorn the access and
    error logs are handled by gunicorn itself (see gunicorn_conf.py).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates on reload.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    root.addHandler(handler)

    # SQL echo is noisy; passlib complains about newer bcrypt builds
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    logging.captureWarnings(True)
