import argparse
import logging
from typing import List, Optional

from shellres.analysis import ResidenceAnalysis
from shellres.utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='First-shell water residence time analysis.')
    parser.add_argument('--trajectory', type=str, help='Path to the text trajectory file.')
    parser.add_argument('--output', type=str, help='Path of the histogram output file.')
    parser.add_argument('--log', type=str, help='Path of the frame/residence log file.')
    parser.add_argument('--config', type=str, help='Path to YAML configuration file.')
    parser.add_argument('--shell-dist', type=float, help='Shell radius around the center atom.')
    parser.add_argument('--frame-time', type=float, help='Time between consecutive frames.')
    parser.add_argument('--bin-width', type=float, help='Histogram bin width (time units).')
    parser.add_argument('--flush-open-on-eof', action='store_true',
                        help='Close residences still open at end of trajectory instead of dropping them.')
    parser.add_argument('--strict', action='store_true', help='Fail on malformed atom records.')
    parser.add_argument('--summary', type=str, help='Write a JSON run summary to this path.')
    parser.add_argument('--plot', type=str, help='Save a histogram plot to this path.')
    parser.add_argument('--no-progress', action='store_true', help='Disable the progress bar.')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging.')
    return parser

def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    overrides = {
        'input_path': args.trajectory, 'output_path': args.output, 'log_path': args.log,
        'shell_dist': args.shell_dist, 'frame_time': args.frame_time, 'bin_width': args.bin_width,
        'summary_path': args.summary, 'plot_path': args.plot,
    }
    if args.flush_open_on_eof: overrides['flush_open_on_eof'] = True
    if args.strict: overrides['strict_parsing'] = True
    if args.no_progress: overrides['show_progress'] = False

    try:
        manager = ConfigManager(args.config)
        for key, value in overrides.items():
            if value is not None: manager.set_value(key, value)
        config = manager.to_analysis_config()

        ResidenceAnalysis(config).run()
        logger.info("Residence analysis completed.")

    except FileNotFoundError as e: logger.error(f"File Error: {e}"); raise SystemExit(1)
    except ValueError as e: logger.error(f"Value Error: {e}"); raise SystemExit(1)
    except OSError as e: logger.error(f"File Error: {e}"); raise SystemExit(1)

if __name__ == "__main__":
    main()
