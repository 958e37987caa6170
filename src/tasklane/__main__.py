"""Entry point for 'python -m tasklane' command."""

from tasklane.cli import main

if __name__ == "__main__":
    main()
