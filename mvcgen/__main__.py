"""Allow ``python -m mvcgen``."""

from mvcgen.cli import main

main()
