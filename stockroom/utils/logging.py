# stockroom/utils/logging.py
import logging
import sys

from stockroom.utils.settings import LOG_LEVEL

_ROOT = "stockroom"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    #handler tylko raz, nawet przy wielokrotnym imporcie
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL.upper())
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger podpiety pod wspolny logger "stockroom".
    Nazwy modulow spoza pakietu tez laduja pod nim.
    """
    _configure_root()
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")
