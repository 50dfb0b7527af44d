import sys

from regrep.cli import main

sys.exit(main())
