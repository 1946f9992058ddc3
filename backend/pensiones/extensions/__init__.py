from .db import db
from .migrate import migrate
from .ma import ma

__all__ = ["db", "migrate", "ma"]
