import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

import tutorial


def runMain():
    tutorial.main()


if __name__ == "__main__":
    runMain()
