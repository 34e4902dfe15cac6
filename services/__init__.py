# services/__init__.py

# This file makes the 'services' directory a Python package and
# exposes its modules for import.

from . import product_state
from . import product_sync
from . import page_sessions
