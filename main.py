import sys
import os
# Ensure we can find the vttcue package when run from a checkout
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from vttcue.cli import main

if __name__ == "__main__":
    sys.exit(main())
