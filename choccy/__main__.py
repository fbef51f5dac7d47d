import sys

from choccy.repl import main

sys.exit(main())
