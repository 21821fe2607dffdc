"""Entry point for running as a module: python -m todo_board"""

import sys

from todo_board.cli import main

if __name__ == "__main__":
    sys.exit(main())
