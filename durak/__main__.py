import sys

from durak.cli import main

sys.exit(main())
