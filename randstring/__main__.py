import sys

from randstring.cli import main

sys.exit(main())
