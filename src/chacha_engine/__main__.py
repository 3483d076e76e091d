import sys

from chacha_engine.python_core import main

sys.exit(main())
