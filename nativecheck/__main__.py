"""Allow running nativecheck with ``python -m nativecheck``."""

from .cli import main

if __name__ == "__main__":
    main()
