"""Allow `python -m taskboard`."""

from .cli.main import main

main()
