"""
Allow running the package directly: python -m fractal_explorer
"""
from .app import run


def main():
    run()


if __name__ == "__main__":
    main()
