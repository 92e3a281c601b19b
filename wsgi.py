# wsgi.py (at repo root)
# Tables and the tip catalog are created by ``flask seed-tips`` (or
# ``flask db upgrade``) before the server starts, not on import.
from wellcheck import create_app

app = create_app()
