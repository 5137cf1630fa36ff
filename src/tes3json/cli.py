import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import tes3json.plugins  # Ensure codecs are registered
from tes3json.config import AppConfig
from tes3json.core.errors import OutputExistsError
from tes3json.core.models import PROGRESS_DONE, PROGRESS_FAILED, ConversionDirection, ConversionRequest
from tes3json.core.progress import QueueSink
from tes3json.core.runner import ConversionJob, start_conversion
from tes3json.core.transcoder import to_legacy, to_native
from tes3json.i18n.i18n import i18n
from tes3json.plugins.registry import PluginRegistry
from tes3json.utils.paths import derive_output_path

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _pick(flag: Optional[bool], default: bool) -> bool:
    return default if flag is None else flag


def _follow(job: ConversionJob, sink: QueueSink, name: str) -> None:
    """Print progress until the job reports a terminal value or its thread dies."""
    while True:
        value = sink.poll(timeout=POLL_INTERVAL)
        if value is None:
            if job.is_alive():
                continue
            value = sink.poll()
            if value is None:
                break
        if value >= 0:
            print(i18n.t("log_progress").format(file=name, value=value))
        if value in (PROGRESS_DONE, PROGRESS_FAILED):
            break
    job.join()


def convert_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    transcode = _pick(args.transcode, cfg.transcode)
    compact = _pick(args.compact, cfg.compact)
    overwrite = _pick(args.overwrite, cfg.overwrite)
    codec = args.codec or cfg.codec
    codec_options = {"tes3conv_path": args.tes3conv or cfg.tes3conv_path}

    if args.save_defaults:
        cfg.transcode, cfg.compact, cfg.overwrite, cfg.codec = transcode, compact, overwrite, codec
        cfg.tes3conv_path = codec_options["tes3conv_path"]
        try:
            print(i18n.t("defaults_saved").format(path=cfg.save()))
        except OSError as e:
            logger.warning("Could not save defaults: %s", e)

    failures = 0
    for f in args.files:
        fpath = Path(f)
        if args.to:
            direction = ConversionDirection(args.to)
        else:
            direction = ConversionDirection.for_input(f)
        target = derive_output_path(f, direction)

        request = ConversionRequest(
            input_path=str(fpath),
            direction=direction,
            transcode=transcode,
            compact=compact,
            overwrite=overwrite,
            codec=codec,
            codec_options=codec_options,
        )

        print(f"{i18n.t('log_start')}: {fpath.name}")
        sink = QueueSink()
        job = start_conversion(request, sink)
        _follow(job, sink, fpath.name)

        if job.error is None:
            print(i18n.t("log_success").format(file=fpath.name, target=target))
            continue

        failures += 1
        if isinstance(job.error, OutputExistsError):
            print(i18n.t("log_exists").format(target=job.error.path), file=sys.stderr)
        else:
            print(i18n.t("log_fail").format(file=fpath.name, err=str(job.error)), file=sys.stderr)

    return 1 if failures else 0


def transcode_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    src = Path(args.file)
    rewrite = to_native if args.to_native else to_legacy
    try:
        text = rewrite(src.read_text(encoding="utf-8"))
        if args.output:
            Path(args.output).write_text(text, encoding="utf-8", newline="\n")
            print(i18n.t("transcode_done").format(target=args.output))
        else:
            sys.stdout.write(text)
    except (OSError, UnicodeDecodeError) as e:
        print(i18n.t("transcode_fail").format(file=src.name, err=str(e)), file=sys.stderr)
        return 1
    return 0


def codecs_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    print(i18n.t("codecs_header"))
    for name in PluginRegistry.available_codecs():
        print(f"  {name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TES3 plugin <-> JSON converter with 1C text rewriting")
    parser.add_argument("--lang", default="", help="Language for messages (e.g. en-US, ru-RU)")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-q", "--quiet", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert plugins to JSON or JSON to plugins")
    convert_parser.add_argument("files", nargs="+", help="Input files (.esp/.esm or .json)")
    convert_parser.add_argument(
        "--to", choices=[d.value for d in ConversionDirection],
        help="Output format; guessed from each input's extension if omitted",
    )
    convert_parser.add_argument(
        "--1c", dest="transcode", action=argparse.BooleanOptionalAction, default=None,
        help="Rewrite text through the 1C legacy table",
    )
    convert_parser.add_argument("--compact", action=argparse.BooleanOptionalAction, default=None)
    convert_parser.add_argument("--overwrite", action=argparse.BooleanOptionalAction, default=None)
    convert_parser.add_argument("--codec", default="", help="Plugin codec name")
    convert_parser.add_argument("--tes3conv", default="", help="Path to the tes3conv executable")
    convert_parser.add_argument("--save-defaults", action="store_true", help="Store these options in the config file")

    transcode_parser = subparsers.add_parser("transcode", help="Rewrite a text file through the 1C table")
    transcode_parser.add_argument("file")
    transcode_parser.add_argument("--to-native", action="store_true", help="Legacy 1C text back to Cyrillic")
    transcode_parser.add_argument("-o", "--output", default="", help="Output file (default: stdout)")

    subparsers.add_parser("codecs", help="List plugin codecs")
    return parser


COMMANDS = {
    "convert": convert_cmd,
    "transcode": transcode_cmd,
    "codecs": codecs_cmd,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    cfg = AppConfig.load()
    i18n.set_locale(args.lang or cfg.lang)
    return COMMANDS[args.command](args, cfg)

if __name__ == "__main__":
    sys.exit(main())
