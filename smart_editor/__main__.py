import sys

from smart_editor.cli import main

sys.exit(main())
