import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from polysym.builders import SOLIDS
from polysym.context import SymmetryContext
from polysym.reporting import analyse_code


def main() -> None:
    context = SymmetryContext()
    for index, name in enumerate(sorted(SOLIDS), start=1):
        report = analyse_code(SOLIDS[name](5), index, context)
        print(f"{name:>14}: {report.group.name:<4} order {report.order:>3}")


if __name__ == "__main__":
    main()
