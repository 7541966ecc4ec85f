import sys

from mechanic_shop.main import main

if __name__ == "__main__":
    sys.exit(main())
