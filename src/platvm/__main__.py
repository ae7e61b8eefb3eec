import sys

from platvm.cli import main

sys.exit(main())
