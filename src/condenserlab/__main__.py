"""Allows `python -m condenserlab`."""
from condenserlab.main import main

if __name__ == "__main__":
    main()
