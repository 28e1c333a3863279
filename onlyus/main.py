"""Application entry point for the OnlyUs desktop profile client."""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import get_settings
from .deep_links import parse_deep_link

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="onlyus", description="OnlyUs profile client")
    parser.add_argument("link", nargs="?", help="https://onlyus.app/... or onlyus://... link to open")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    entry_link = None
    if args.link:
        entry_link = parse_deep_link(args.link, settings=settings)
        if entry_link is None:
            logger.warning("Ignoring unsupported link %s", args.link)

    # Imported late so configuration errors surface before Tk starts
    from .desktop import ProfileApp

    ProfileApp(settings, entry_link=entry_link).run()


if __name__ == "__main__":
    main()
