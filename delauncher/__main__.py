import sys

from delauncher.cli import main

sys.exit(main())
