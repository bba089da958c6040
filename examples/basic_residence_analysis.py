#!/usr/bin/env python3
"""
Basic Residence Time Analysis Example

This script demonstrates how to compute the first-shell water residence
time histogram of a trajectory using the shellres package.
"""

from pathlib import Path

from shellres import AnalysisConfig, ResidenceAnalysis

def main():
    # Create output directory
    output_dir = Path("residence_output")
    output_dir.mkdir(exist_ok=True)

    config = AnalysisConfig(
        input_path="liquid-e100-v100.arc",
        output_path=str(output_dir / "bins.txt"),
        log_path=str(output_dir / "log.txt"),
        shell_dist=3.6,  # Angstrom
        frame_time=2e-12,  # s between frames
        bin_width=6e-12,  # s
        summary_path=str(output_dir / "summary.json"),
        plot_path=str(output_dir / "residence_histogram.png"),
    )

    print("Running residence analysis...")
    result = ResidenceAnalysis(config).run()

    summary = result.summary()
    print(f"Frames: {summary['frame_count']}, completed residences: {summary['n_residences']}")
    if summary['mean_residence_time'] is not None:
        print(f"Mean residence time: {summary['mean_residence_time']:e} s")
    print(f"Analysis complete. Results saved in {output_dir}")

if __name__ == "__main__":
    main()
