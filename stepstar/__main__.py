# stepstar/__main__.py
import sys

from stepstar.app.cli import main

if __name__ == "__main__":
    sys.exit(main())
