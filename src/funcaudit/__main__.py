"""python -m funcaudit"""

import sys

from funcaudit.presentation.cli import main

sys.exit(main())
