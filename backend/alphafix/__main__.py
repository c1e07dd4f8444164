import sys

from alphafix.cli import main

sys.exit(main())
