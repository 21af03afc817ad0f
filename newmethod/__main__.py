"""
Entry point for `python -m newmethod`.
"""

from .cli import main

if __name__ == '__main__':
    main()
