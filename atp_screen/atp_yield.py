"""
Maximal ATP yield of a model on a diet, with and without oxygen
"""

import logging
from typing import Optional, Tuple

import pandas as pd
from cobra import Metabolite, Model, Reaction
from optlang.interface import OPTIMAL

from .config import AEROBIC_OXYGEN_UPTAKE, ATP_DEMAND_ID, OXYGEN_EXCHANGE_ID
from .diet import apply_diet, find_exchange, load_diet

logger = logging.getLogger(__name__)

# ATP hydrolysis: atp + h2o -> adp + pi + h
ATP_HYDROLYSIS = {'atp': -1, 'h2o': -1, 'adp': 1, 'pi': 1, 'h': 1}


def _find_cytosolic(model: Model, base_id: str) -> Optional[Metabolite]:
    for met_id in (f"{base_id}[c]", f"{base_id}_c"):
        if met_id in model.metabolites:
            return model.metabolites.get_by_id(met_id)
    return None


def ensure_atp_demand(model: Model, demand_id: str = ATP_DEMAND_ID) -> Reaction:
    """
    Return the ATP demand reaction, adding it when the model lacks one

    The added reaction hydrolyses cytosolic ATP using whichever of
    h2o, adp, pi and h are present in the model.
    """
    if demand_id in model.reactions:
        return model.reactions.get_by_id(demand_id)

    atp = _find_cytosolic(model, 'atp')
    if atp is None:
        raise ValueError(f"Model {model.id} has no cytosolic ATP, cannot add {demand_id}")

    stoichiometry = {}
    for base_id, coef in ATP_HYDROLYSIS.items():
        met = _find_cytosolic(model, base_id)
        if met is not None:
            stoichiometry[met] = coef

    demand = Reaction(demand_id)
    demand.name = 'ATP demand'
    demand.add_metabolites(stoichiometry)
    demand.bounds = (0, 1000)
    model.add_reactions([demand])
    logger.debug(f"    added {demand_id} to {model.id}: {demand.reaction}")
    return demand


def _max_atp_flux(model: Model) -> float:
    solution = model.optimize()
    if solution.status != OPTIMAL:
        logger.debug(f"    {model.id}: solver status {solution.status}")
        return 0.0
    return float(solution.objective_value)


def test_atp(
        model: Model,
        diet: Optional[pd.DataFrame] = None,
        oxygen_exchange: str = OXYGEN_EXCHANGE_ID,
        oxygen_uptake: float = AEROBIC_OXYGEN_UPTAKE,
        demand_id: str = ATP_DEMAND_ID,
) -> Tuple[float, float]:
    """
    Maximal ATP demand flux under aerobic and anaerobic conditions

    Parameters:
    -----------
    model : cobra.Model
        Model to test, left unchanged
    diet : pd.DataFrame, optional
        Diet table from load_diet(); the Western diet by default
    oxygen_exchange : str
        Oxygen exchange reaction ID
    oxygen_uptake : float
        Oxygen exchange lower bound in the aerobic condition
    demand_id : str
        ATP demand reaction ID

    Returns:
    --------
    Tuple[float, float]: (aerobic ATP flux, anaerobic ATP flux)
    """
    test_model = model.copy()
    if diet is None:
        diet = load_diet()
    apply_diet(test_model, diet)

    demand = ensure_atp_demand(test_model, demand_id)
    test_model.objective = demand.id
    test_model.objective_direction = 'max'

    o2 = find_exchange(test_model, oxygen_exchange)
    if o2 is None:
        logger.warning(f"    {model.id}: no oxygen exchange {oxygen_exchange}, aerobic test is anaerobic")
    else:
        o2.lower_bound = oxygen_uptake
    aerobic = _max_atp_flux(test_model)

    if o2 is not None:
        o2.lower_bound = 0
    anaerobic = _max_atp_flux(test_model)

    return aerobic, anaerobic
