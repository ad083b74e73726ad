"""Default engine bootstrap (import side-effect); a bad table fails here."""
from .api import set_engine
from .bootstrap import build_engine

set_engine(build_engine())
