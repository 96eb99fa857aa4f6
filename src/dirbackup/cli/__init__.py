"""dirbackup CLI -- back up directory trees from the command line."""

from ._helpers import main  # noqa: F401 -- entry point

# Import command modules to register Click commands with the main group.
from . import _backup  # noqa: F401
