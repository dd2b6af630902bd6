"""Allow running the CLI with ``python -m src.edenred_client.cli``."""

from . import main

main()
