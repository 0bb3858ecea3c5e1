import sys
from trainer_calc.cli import main

if __name__ == "__main__":
    sys.exit(main())
