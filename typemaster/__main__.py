import sys

from typemaster.main import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
