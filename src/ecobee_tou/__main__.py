"""Allow running as ``python -m ecobee_tou``."""

from .cli import main

main()
