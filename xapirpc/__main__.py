import sys

from xapirpc.cli import main

sys.exit(main())
