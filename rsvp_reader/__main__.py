"""Package entry point for ``python -m rsvp_reader``.

WHY: Users can run the player as ``python -m rsvp_reader book.txt``
without installing the console script.

HOW: Delegates to the CLI's main() and exits with its return code.
"""

import sys

if __name__ == "__main__":
    from rsvp_reader.cli import main
    sys.exit(main())
