import sys

from .guard import main


sys.exit(main())
