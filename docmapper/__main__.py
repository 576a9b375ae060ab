import sys

from docmapper.main import main

sys.exit(main())
