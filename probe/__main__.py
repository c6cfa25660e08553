"""Permet l'exécution via ``python -m probe``"""

import sys

from probe.main import main

sys.exit(main())
