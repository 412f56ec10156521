import sys

from hostkit.cli.main import main

sys.exit(main())
