"""
Violin plot of ATP yields
"""

import logging
import os
from typing import List, Optional

import matplotlib

matplotlib.use('Agg')
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from .config import COLOR_AEROBIC, COLOR_ANAEROBIC, DPI, FIGURE_SIZE, FONT_SIZE  # noqa: E402

logger = logging.getLogger(__name__)


def apply_violin_style():
    """Uniform font size on ticks, labels and title; boxed axes."""
    plt.rcParams.update({
        'font.size': FONT_SIZE,
        'axes.labelsize': FONT_SIZE,
        'axes.titlesize': FONT_SIZE,
        'xtick.labelsize': FONT_SIZE,
        'ytick.labelsize': FONT_SIZE,
        'axes.spines.top': True,
        'axes.spines.right': True,
    })


def violin_labels(model_sets: List[str]) -> List[str]:
    """'Aerobic'/'Anaerobic' for one set, 'Aerobic, Draft' ... for several."""
    if len(model_sets) == 1:
        return ['Aerobic', 'Anaerobic']
    return [f"{condition}, {model_set}" for model_set in model_sets
            for condition in ('Aerobic', 'Anaerobic')]


def to_long_format(results: pd.DataFrame, model_sets: Optional[List[str]] = None) -> pd.DataFrame:
    """
    One row per (model, condition) with the violin label; NaN fluxes are dropped

    `model_sets` lists every screened set, including sets without models,
    and decides between the plain and the 'Condition, Set' labels.
    """
    if model_sets is None:
        model_sets = list(dict.fromkeys(results['set']))
    long_df = results.melt(
        id_vars=['set', 'model'], value_vars=['aerobic', 'anaerobic'],
        var_name='condition', value_name='flux'
    ).dropna(subset=['flux'])

    if len(model_sets) == 1:
        long_df['label'] = [condition.capitalize() for condition in long_df['condition']]
    else:
        long_df['label'] = [f"{condition.capitalize()}, {model_set}"
                            for condition, model_set in zip(long_df['condition'], long_df['set'])]
    return long_df


def plot_atp_distribution(
        results: pd.DataFrame,
        output_dir: str,
        recon_version: str,
        model_sets: Optional[List[str]] = None,
) -> str:
    """
    Draw the ATP yield distributions and save them as PNG

    Parameters:
    -----------
    results : pd.DataFrame
        Screening table with columns 'set', 'model', 'aerobic', 'anaerobic'
    output_dir : str
        Folder for the figure
    recon_version : str
        Reconstruction resource name used in the title and file name
    model_sets : List[str], optional
        Screened sets in plot order, e.g. ['Draft', 'Refined'];
        taken from `results` when omitted

    Returns:
    --------
    str: path of the PNG file
    """
    apply_violin_style()

    if model_sets is None:
        model_sets = list(dict.fromkeys(results['set']))
    labels = violin_labels(model_sets)
    long_df = to_long_format(results, model_sets)
    palette = {label: COLOR_AEROBIC if label.startswith('Aerobic') else COLOR_ANAEROBIC
               for label in labels}

    fig, ax = plt.subplots(figsize=FIGURE_SIZE)
    if long_df.empty:
        logger.warning("  No ATP fluxes to plot")
        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels)
    else:
        sns.violinplot(data=long_df, x='label', y='flux', hue='label', order=labels,
                       hue_order=labels, palette=palette, legend=False, cut=0, ax=ax)

    ax.set_xlabel('')
    ax.set_ylabel('ATP flux (mmol/gDW/h)')
    ax.set_title(f"ATP production on Western diet, {recon_version}")

    png_path = os.path.join(output_dir, f"ATP_Western_diet_{recon_version}.png")
    fig.savefig(png_path, dpi=DPI, bbox_inches='tight', facecolor='white')
    plt.close(fig)

    logger.info(f"✓ Plot saved to: {png_path}")
    return png_path
