import sys

from snap.main import run

sys.exit(run())
