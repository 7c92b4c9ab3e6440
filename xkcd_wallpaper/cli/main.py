import argparse
import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.color import Color
from ..models.contrast_mode import ContrastMode
from ..models.errors import InvalidColor, WallpaperError
from ..pipeline.wallpaper_builder import OUTPUT_TEMPLATE, create_wallpaper
from ..services.background_reference import FixedReference
from ..services.classification_service import ColorClassifier

logger = logging.getLogger(__name__)

DEFAULT_BG = os.getenv("DEFAULT_BG_COLOR", "#1F241F")

EPILOG = """\
Examples:

    Generate a 2560x1440 wallpaper from comic number 3084
    with a dark green background and white colored drawings

        xkcd-wallpaper \\
            --width 2560 --height 1440 \\
            --bg "#1F241F" \\
            --fg light \\
            --comic 3084

    Generate a 1920x1080 wallpaper from the latest issue
    and write it to a specific output folder with
    a Year-Month-Day-Title format, e.g. 2025-06-20-SomeTitle.

        xkcd-wallpaper \\
            --width 1920 --height 1080 \\
            --output ./output/%y-%m-%d-%t.png

Format string format:
    You can use the following placeholders in the format string:
        %y   Year (e.g., 2025)
        %m   Two-digit month (e.g., 06)
        %d   Two-digit day (e.g., 22)
        %n   Comic number
        %t   Title
"""


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def _hex_color(value: str) -> Color:
    try:
        return Color.from_hex(value)
    except InvalidColor as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xkcd-wallpaper",
        description="Download xkcd wallpapers. "
                    "To use simply call `xkcd-wallpaper --width 1920 --height 1080`",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=_positive_int, required=True,
                        help="Width of output wallpaper")
    parser.add_argument("--height", type=_positive_int, required=True,
                        help="Height of output wallpaper")
    parser.add_argument("--bg", type=_hex_color, default=DEFAULT_BG,
                        help=f"Background color in HEX format (default: {DEFAULT_BG})")
    parser.add_argument("--fg", choices=[m.value for m in ContrastMode], default="light",
                        help="Foreground color, either dark or light (default: light)")
    parser.add_argument("--comic", type=_positive_int, default=None,
                        help="Optional comic number, by default the latest xkcd will be used.")
    parser.add_argument("-o", "--output", default=OUTPUT_TEMPLATE,
                        help=f"Output filename, supports placeholders (default: {OUTPUT_TEMPLATE})")
    parser.add_argument("--source-bg", type=_hex_color, default=None,
                        help="Comic background color to replace; detected from the border if omitted")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    classifier = None
    if args.source_bg is not None:
        classifier = ColorClassifier(reference=FixedReference(args.source_bg))

    logger.info("converting xkcd image into wallpaper")
    try:
        path = create_wallpaper(
            args.comic,
            args.width,
            args.height,
            args.bg,
            ContrastMode.parse(args.fg),
            args.output,
            classifier=classifier,
        )
    except WallpaperError as err:
        print(f"Failed to create wallpaper: {err}", file=sys.stderr)
        return 1

    print(f"Wallpaper saved to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
