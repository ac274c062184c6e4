"""Flask extension instances, bound in ``create_app``."""

from __future__ import annotations

from flask_cors import CORS
from flask_sock import Sock

sock = Sock()
cors = CORS()
