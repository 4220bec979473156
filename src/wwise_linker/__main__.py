import sys

from wwise_linker.cli import main

sys.exit(main())
