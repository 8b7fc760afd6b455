import sys

from fontprint.cli import main


if __name__ == '__main__':
    # Run from the project root after `pip install -e .`
    sys.exit(main())
