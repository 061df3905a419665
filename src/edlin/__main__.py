import sys

from edlin.cli import main

sys.exit(main())
