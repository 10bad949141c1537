import logging
import sys


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stdout; DEBUG for our package when verbose."""

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("parkterrain").setLevel(logging.DEBUG if verbose else logging.INFO)
