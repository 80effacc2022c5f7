import sys

from cruisemaps.main import main

sys.exit(main())
