import sys

from nuigen.cli import main

sys.exit(main())
