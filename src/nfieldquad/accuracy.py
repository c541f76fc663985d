"""Accuracy checks of n-field rules against dense reference integrals.

Usage:

    nfieldquad-accuracy --config configs/accuracy.yaml --output results.json
"""

import argparse
import json
import logging
import pprint
import time
from typing import NamedTuple

import numpy as np
from tqdm import tqdm

from . import integrals
from .config_parser import AccuracyConfig, ConfigParsingError, parse_accuracy_config
from .reference import dense_nfield_integral, relative_error
from .transform import nfieldtrans
from .utils import read_config


class AccuracyResult(NamedTuple):
    config: AccuracyConfig
    quadrature: float
    reference: float
    rel_error: float
    passed: bool
    elapsed: float


def random_coefficients(num_modes: int, seed: int, scale: float = 1.0) -> np.ndarray:
    """Complex normal coefficients, a high temperature state of all modes."""
    rng = np.random.default_rng(seed)
    return scale * (rng.normal(size=num_modes) + 1j * rng.normal(size=num_modes))


def run_accuracy_check(config: AccuracyConfig) -> AccuracyResult:
    c = random_coefficients(config.modes, config.seed, config.coeff_scale)

    start = time.perf_counter()
    _, w, T = nfieldtrans(config.n, config.modes, config.basis)
    quadrature = float(integrals.nfield_integral(w, T, c, config.n))
    elapsed = time.perf_counter() - start

    reference = dense_nfield_integral(
        c, config.n, basis=config.basis, num_pts=config.dense_pts
    )
    rel_error = relative_error(quadrature, reference)

    return AccuracyResult(
        config=config,
        quadrature=quadrature,
        reference=reference,
        rel_error=rel_error,
        passed=rel_error < config.tolerance,
        elapsed=elapsed,
    )


def _result_to_dict(result: AccuracyResult) -> dict:
    d = result._asdict()
    d["config"] = result.config._asdict()
    return d


def write_results(results: list[AccuracyResult], filename: str) -> None:
    with open(filename, "w") as f:
        json.dump([_result_to_dict(r) for r in results], f, indent=2)


def run_all(configs: list[dict]) -> list[AccuracyResult]:
    results = []
    for i, config in enumerate(pbar := tqdm(configs)):
        try:
            parsed = parse_accuracy_config(config["run"])
        except ConfigParsingError as e:
            logging.error(f"Error in run {i}. Skipping it:\n{e}")
            continue

        pbar.set_description(f"n={parsed.n} M={parsed.modes}")
        result = run_accuracy_check(parsed)
        results.append(result)

        log = logging.info if result.passed else logging.warning
        log(
            f"n={parsed.n} M={parsed.modes} basis={parsed.basis} "
            f"seed={parsed.seed}: rel. error {result.rel_error:.3e} "
            f"({'ok' if result.passed else 'FAILED'})"
        )

    return results


def main(args: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(
        prog="nfieldquad-accuracy",
        description="Checks n-field quadrature rules against dense integrals.",
    )

    parser.add_argument(
        "--config", type=str, required=True, help="path to config file to load"
    )

    parser.add_argument(
        "--run",
        type=int,
        default=-1,
        help="run only the check with config corresponding to the given index.",
    )

    parser.add_argument(
        "--print-config",
        action="store_true",
        help="print the loaded configurations and exit",
    )

    parser.add_argument(
        "--output", type=str, default=None, help="write results to this json file"
    )

    parsed_args = parser.parse_args(args)

    configs = read_config(parsed_args.config)
    logging.info(f"Loaded {len(configs)} configurations from {parsed_args.config}")

    if parsed_args.run >= 0:
        configs = [configs[parsed_args.run]]
        logging.info(f"Running only one check with index {parsed_args.run}")

    if parsed_args.print_config:
        pprint.pprint(configs)
        return 0

    results = run_all(configs)

    if parsed_args.output is not None:
        write_results(results, parsed_args.output)
        logging.info(f"Wrote {len(results)} results to {parsed_args.output}")

    if not results:
        logging.error("No checks ran. Every configuration was rejected.")
        return 1

    failed = sum(not r.passed for r in results)
    if failed:
        logging.error(f"{failed} out of {len(results)} checks failed.")
        return 1

    logging.info(f"All {len(results)} checks passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
