import sys

from namekit.cli import main

sys.exit(main())
