import argparse
import sys

from blockfft.common.constants import BLOCK_SIZE
from blockfft.common.debug_logger import enable_debug_logging
from blockfft.common.errors import (
    InvalidConfigurationError,
    OutOfRangeError,
    SourceUnavailableError,
)
from blockfft.core.scheduler import BlockTransformScheduler, coverage_mask
from blockfft.core.spectrum import SpectrumBuffers
from blockfft.sink.text_sink import TextResultSink
from blockfft.wav.sample_source import WavSampleSource


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Block FFT analysis of WAV audio")
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        required=True,
        help="Path to the input PCM .wav file",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Path to the output text file (default: standard output)",
    )
    parser.add_argument(
        "-b",
        "--block-size",
        type=int,
        default=BLOCK_SIZE,
        help=f"Transform block size, a power of two (default: {BLOCK_SIZE})",
    )
    parser.add_argument(
        "--channel",
        type=int,
        default=0,
        help="Channel to analyse for multi-channel input (default: 0)",
    )
    parser.add_argument(
        "--mark-untransformed",
        action="store_true",
        help="Append ' *' to values past the remainder window that were not transformed",
    )
    parser.add_argument(
        "--debug-log",
        type=str,
        help="Enable debug logging to specified file (e.g., --debug-log blockfft_debug.log)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.debug_log:
        enable_debug_logging(args.debug_log)
        print(f"Debug logging enabled to: {args.debug_log}", file=sys.stderr)

    try:
        scheduler = BlockTransformScheduler(block_size=args.block_size)
        source = WavSampleSource(channel=args.channel)
        num_samples, samples = source.provide(args.input)

        descriptors = scheduler.plan(num_samples)
        remainder = scheduler.remainder_length(num_samples)
        print(
            f"Input WAV: {source.channel_count} channels, {source.sample_width * 8}-bit, "
            f"{source.sample_rate} Hz, {num_samples} samples (channel {args.channel}). "
            f"Processing {scheduler.full_block_count(num_samples)} blocks of {args.block_size}, "
            f"remainder window {remainder}.",
            file=sys.stderr,
        )

        spectrum = SpectrumBuffers.from_samples(samples)
        scheduler.process(spectrum.real, spectrum.imag, num_samples)
    except (SourceUnavailableError, InvalidConfigurationError, OutOfRangeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    coverage = coverage_mask(descriptors, num_samples) if args.mark_untransformed else None

    if args.output:
        try:
            with open(args.output, "w") as f_out:
                TextResultSink(f_out, mark_untransformed=args.mark_untransformed).consume(spectrum, coverage)
        except OSError as e:
            print(f"Error: Failed to write output file {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Outputting to: {args.output}", file=sys.stderr)
    else:
        TextResultSink(sys.stdout, mark_untransformed=args.mark_untransformed).consume(spectrum, coverage)

    return 0


if __name__ == "__main__":
    sys.exit(main())
