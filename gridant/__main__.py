import sys

from gridant.cli import main

sys.exit(main())
