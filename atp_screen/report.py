"""
Flag models with implausible ATP yield and write the reports
"""

import logging
import os
from typing import List, Tuple

import pandas as pd

from .config import AEROBIC_ATP_LIMIT, ANAEROBIC_ATP_LIMIT, TOO_HIGH_ATP_FILENAME

logger = logging.getLogger(__name__)

CONDITIONS = ('aerobic', 'anaerobic')


def flag_too_high(
        results: pd.DataFrame,
        aerobic_limit: float = AEROBIC_ATP_LIMIT,
        anaerobic_limit: float = ANAEROBIC_ATP_LIMIT,
) -> Tuple[pd.Series, pd.Series]:
    """Boolean masks of models above the aerobic and anaerobic limits (NaN is never flagged)."""
    return results['aerobic'] > aerobic_limit, results['anaerobic'] > anaerobic_limit


def report_set(
        results: pd.DataFrame,
        label: str,
        aerobic_limit: float = AEROBIC_ATP_LIMIT,
        anaerobic_limit: float = ANAEROBIC_ATP_LIMIT,
) -> List[str]:
    """Log the per-condition summary for one model set and return the lines."""
    too_high = flag_too_high(results, aerobic_limit, anaerobic_limit)

    lines = [f"Report for {label.lower()} models:"]
    for condition, mask in zip(CONDITIONS, too_high):
        n_high = int(mask.sum())
        if n_high > 0:
            lines.append(f"{n_high}  models produce too much ATP under {condition} conditions.")
        else:
            lines.append(f"All models produce reasonable amounts of ATP under {condition} conditions.")

    for line in lines:
        logger.info(line)
    return lines


def collect_too_high(
        results: pd.DataFrame,
        aerobic_limit: float = AEROBIC_ATP_LIMIT,
        anaerobic_limit: float = ANAEROBIC_ATP_LIMIT,
        model_set: str = 'Refined',
) -> List[str]:
    """IDs of models in `model_set` above either limit, deduplicated and sorted."""
    subset = results[results['set'] == model_set]
    aerobic_high, anaerobic_high = flag_too_high(subset, aerobic_limit, anaerobic_limit)
    return sorted(set(subset.loc[aerobic_high | anaerobic_high, 'model']))


def save_too_high(model_ids: List[str], output_dir: str) -> str:
    """Write the flagged model IDs, one per row. The file is written even when empty."""
    output_path = os.path.join(output_dir, TOO_HIGH_ATP_FILENAME)
    pd.DataFrame({'model': list(model_ids)}).to_csv(output_path, index=False)
    logger.info(f"✓ Flagged models saved to: {output_path}")
    return output_path


def save_results_table(results: pd.DataFrame, output_dir: str, recon_version: str) -> str:
    output_path = os.path.join(output_dir, f"ATP_test_results_{recon_version}.csv")
    results.to_csv(output_path, index=False, encoding='utf-8-sig')
    logger.info(f"✓ ATP fluxes saved to: {output_path}")
    return output_path
