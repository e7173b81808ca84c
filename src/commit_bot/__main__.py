import sys

from commit_bot.cli.main import main

sys.exit(main())
