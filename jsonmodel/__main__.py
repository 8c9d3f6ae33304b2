"""Entry point for running jsonmodel as a module (python -m jsonmodel)."""

from jsonmodel.cli.main import main

if __name__ == "__main__":
    main()
