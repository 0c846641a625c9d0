"""
Diet constraints on exchange reactions
"""

import logging
import os
import re
from typing import List, Optional

import pandas as pd
from cobra import Model, Reaction

logger = logging.getLogger(__name__)

DEFAULT_DIET_PATH = os.path.join(os.path.dirname(__file__), 'data', 'western_diet.tsv')

# EX_glc_D(e) / EX_glc_D[e] / EX_glc_D_e
_COMPARTMENT_SUFFIX = re.compile(r'(\(e\)|\[e\]|_e)$')


def load_diet(path: Optional[str] = None) -> pd.DataFrame:
    """
    Read a diet table

    Parameters:
    -----------
    path : str, optional
        Tab-separated file with columns 'reaction' and 'flux'.
        Negative flux means uptake. Defaults to the packaged Western diet.

    Returns:
    --------
    pd.DataFrame: columns ['reaction', 'flux']
    """
    path = path or DEFAULT_DIET_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Diet file not found: '{path}'")

    diet = pd.read_table(path, sep='\t', comment='#')
    missing = {'reaction', 'flux'} - set(diet.columns)
    if missing:
        raise ValueError(f"Diet file {path} is missing columns: {', '.join(sorted(missing))}")

    diet = diet[['reaction', 'flux']].dropna(subset=['reaction'])
    diet['reaction'] = diet['reaction'].astype(str).str.strip()
    diet['flux'] = pd.to_numeric(diet['flux'], errors='raise').astype(float)
    return diet.reset_index(drop=True)


def _exchange_aliases(rxn_id: str) -> List[str]:
    base = _COMPARTMENT_SUFFIX.sub('', rxn_id)
    aliases = [rxn_id]
    for candidate in (f"{base}(e)", f"{base}[e]", f"{base}_e"):
        if candidate not in aliases:
            aliases.append(candidate)
    return aliases


def find_exchange(model: Model, rxn_id: str) -> Optional[Reaction]:
    """Find an exchange reaction regardless of the compartment notation."""
    for candidate in _exchange_aliases(rxn_id):
        if candidate in model.reactions:
            return model.reactions.get_by_id(candidate)
    return None


def apply_diet(model: Model, diet: pd.DataFrame) -> int:
    """
    Constrain the model to the diet

    All exchange uptakes are closed first, then the lower bound of each
    diet exchange found in the model is set to its diet flux.

    Returns:
    --------
    int: number of diet entries applied
    """
    for rxn in model.reactions:
        if rxn.id.startswith('EX_'):
            rxn.lower_bound = 0

    applied = 0
    for rxn_id, flux in zip(diet['reaction'], diet['flux']):
        rxn = find_exchange(model, rxn_id)
        if rxn is None:
            logger.debug(f"    diet exchange not in model: {rxn_id}")
            continue
        if flux > rxn.upper_bound:
            rxn.upper_bound = flux
        rxn.lower_bound = flux
        applied += 1

    return applied
