"""cmdline executable module.

No app-root try/except here: cli.main() is the error boundary for startup
and the REPL owns errors raised while commands run.
"""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
