import sys

from stubgen.cli import main

sys.exit(main())
