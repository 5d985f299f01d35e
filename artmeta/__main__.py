"""Allow ``python -m artmeta``."""

from artmeta.cli.app import main

main()
