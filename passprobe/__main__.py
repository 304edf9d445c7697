import sys

from passprobe.main import main

sys.exit(main())
