import sys

from campus_chat.cli import main

sys.exit(main())
