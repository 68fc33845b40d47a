import argparse
import logging
import sys
from pathlib import Path

from . import l10n
from .config import RenamerSettings, DEFAULT_SETTINGS
from .core import TimelineRenamerApp
from .l10n import Messages
from .reporting import ColorFormatter


def setup_logging(root: Path, save_logs: bool, log_file_name: str,
                  verbose: bool = False, color: bool = True):
    """Sets up logging to the console and, if asked, to a plain-text file in the scanned root."""
    log_level = logging.DEBUG if verbose else logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ColorFormatter("%(message)s") if color else logging.Formatter("%(message)s"))
    handlers = [console]

    if save_logs:
        file_handler = logging.FileHandler(root / log_file_name, mode='w', encoding='utf-8')
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("exiftool").setLevel(logging.WARNING)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="timeline-renamer",
        description="Rename photos and videos to IMG_/VID_yyyy-MM-dd_HH-mm-ss from their capture date",
    )

    p.add_argument("root", type=Path, nargs="?", default=Path.cwd(),
                   help="Directory to scan (default: current directory)")

    p.add_argument("--save-logs", action="store_true",
                   help=f"Also write the transcript to '{DEFAULT_SETTINGS.log_file_name}' in the root")
    p.add_argument("--no-color", action="store_true", help="Plain console output")
    p.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    p.add_argument("--lang", choices=l10n.LANGUAGES, default=None,
                   help="Transcript language (default: from the system locale)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    root = args.root.resolve()

    settings = RenamerSettings(save_logs=args.save_logs or DEFAULT_SETTINGS.save_logs)

    # The log file lives in the root, so it is only opened for a real directory
    setup_logging(root, settings.save_logs and root.is_dir(), settings.log_file_name,
                  verbose=args.verbose, color=not args.no_color)

    if not root.is_dir():
        logging.error(f"Not a directory: {root}")
        return 1

    app = TimelineRenamerApp(
        settings=settings,
        messages=Messages(args.lang),
        show_progress=not args.no_progress,
    )

    try:
        app.rename(root)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
