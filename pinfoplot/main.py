import argparse
import sys
from datetime import timedelta

from pinfoplot.config import AppConfig, RenderConfig, SamplerConfig, parse_duration
from pinfoplot.errors import PinfoplotError
from pinfoplot.logging_config import setup_logging
from pinfoplot.renderer.composite import CompositeRenderer
from pinfoplot.renderer.lengths import parse_length
from pinfoplot.renderer.panels import build_panels
from pinfoplot.sampler.sampler import Sampler

VERSION = "0.0.1"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

_DESCRIPTION = "pinfoplot samples a process and plots its memory, IO and CPU usage into one image"


def _build_parser(config: AppConfig) -> argparse.ArgumentParser:
    # -h is the image height, so the automatic help flag is replaced by -help/--help.
    parser = argparse.ArgumentParser(prog="pinfoplot", description=_DESCRIPTION, add_help=False)
    parser.add_argument("-help", "--help", dest="help", action="store_true", help="help info")
    parser.add_argument("-v", dest="version", action="store_true", help="version info")
    parser.add_argument("-p", dest="pid", type=int, default=-1, help="pid to get info from")
    parser.add_argument(
        "-d",
        dest="duration",
        type=parse_duration,
        default=config.sampler.duration,
        help="sampling duration, e.g. 10s (0 means sample until pid exits)",
    )
    parser.add_argument(
        "-i",
        dest="interval",
        type=parse_duration,
        default=config.sampler.interval,
        help="sampling interval, e.g. 50ms",
    )
    parser.add_argument(
        "-w", dest="width", default=config.render.width, help="output image width (cm or inch)"
    )
    parser.add_argument(
        "-h", dest="height", default=config.render.height, help="output image height (cm or inch)"
    )
    parser.add_argument(
        "-o", dest="output", default=config.render.output_path, help="output image file path"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    config = AppConfig.from_env()
    parser = _build_parser(config)
    args = parser.parse_args(argv)

    if args.help:
        print(f"Version: {VERSION}")
        parser.print_help()
        return EXIT_OK
    if args.version:
        print(f"version: {VERSION}")
        return EXIT_OK

    logger = setup_logging("pinfoplot", log_file=config.log_file)

    if args.pid <= 0:
        logger.error("invalid pid")
        return EXIT_USAGE

    sampler_config = SamplerConfig(duration=args.duration, interval=args.interval)
    render_config = RenderConfig(
        width=args.width, height=args.height, output_path=args.output, dpi=config.render.dpi
    )

    try:
        parse_length(render_config.width)
        parse_length(render_config.height)

        logger.info(f"Collecting info from pid: {args.pid}")
        if sampler_config.duration == timedelta(0):
            logger.info("Your sampling duration is 0, which means sample pid until it exits")

        sampling_run = Sampler(sampler_config).run(args.pid)
        panels = build_panels(sampling_run)
        output_path = CompositeRenderer(render_config).render(panels)
    except PinfoplotError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return EXIT_FAILURE

    logger.info(f"Plotted {len(sampling_run)} samples of pid {args.pid} to {output_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
