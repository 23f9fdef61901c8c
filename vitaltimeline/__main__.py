import sys

from vitaltimeline.cli import main

sys.exit(main())
