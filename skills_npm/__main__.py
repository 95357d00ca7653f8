"""Entry point for running skills-npm as a module.

This allows the package to be executed as:
    python -m skills_npm

It delegates to the CLI main function.
"""

from skills_npm.cli.main import main

if __name__ == "__main__":
    main()
