import sys

from mutindex.cli import main

sys.exit(main())
