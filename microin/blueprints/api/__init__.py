from flask import Blueprint

api_bp = Blueprint("api", __name__)

# Import route modules to register their endpoints
from . import tasks            # noqa: E402,F401
from . import users            # noqa: E402,F401
from . import recommendations  # noqa: E402,F401
from . import companies        # noqa: E402,F401
