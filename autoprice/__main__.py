import sys

from autoprice.analysis.cli import main

sys.exit(main())
