import sys

from tourneykit.cli import main

sys.exit(main())
