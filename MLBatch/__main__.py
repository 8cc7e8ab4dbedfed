import sys

from MLBatch.cli import main

sys.exit(main())
