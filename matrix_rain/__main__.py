"""
Entry point for `python -m matrix_rain`.

The console script declared in pyproject.toml calls the same
`matrix_rain.main:main`.
"""

from .main import main

if __name__ == "__main__":
    main()
