import sys

from png2ico.main import main

sys.exit(main())
