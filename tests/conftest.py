import cobra
import pandas as pd
import pytest
from cobra import Metabolite, Model, Reaction


def _add_reaction(model, rxn_id, stoichiometry, bounds=(0, 1000)):
    rxn = Reaction(rxn_id)
    model.add_reactions([rxn])
    rxn.add_metabolites({model.metabolites.get_by_id(m): c for m, c in stoichiometry.items()})
    rxn.bounds = bounds
    return rxn


def build_toy_model(model_id='toy', atp_per_glucose=30, atp_leak=False, atp_demand=True):
    """
    Glucose is respired (needs 6 O2) or fermented to lactate (2 ATP).
    `atp_leak` adds a free ATP synthesis reaction.
    """
    model = Model(model_id)
    model.add_metabolites([
        Metabolite('glc_D_e', compartment='e'), Metabolite('o2_e', compartment='e'),
        Metabolite('co2_e', compartment='e'), Metabolite('lac_L_e', compartment='e'),
        Metabolite('glc_D_c', compartment='c'), Metabolite('o2_c', compartment='c'),
        Metabolite('co2_c', compartment='c'), Metabolite('lac_L_c', compartment='c'),
        Metabolite('atp_c', compartment='c'), Metabolite('adp_c', compartment='c'),
        Metabolite('pi_c', compartment='c'),
    ])

    for met in ('glc_D', 'o2', 'co2', 'lac_L'):
        _add_reaction(model, f'EX_{met}_e', {f'{met}_e': -1}, (-1000, 1000))

    _add_reaction(model, 'GLCt', {'glc_D_e': -1, 'glc_D_c': 1})
    _add_reaction(model, 'O2t', {'o2_e': -1, 'o2_c': 1})
    _add_reaction(model, 'CO2t', {'co2_c': -1, 'co2_e': 1})
    _add_reaction(model, 'LACt', {'lac_L_c': -1, 'lac_L_e': 1})
    _add_reaction(model, 'RESP', {'glc_D_c': -1, 'o2_c': -6, 'adp_c': -atp_per_glucose,
                                  'pi_c': -atp_per_glucose, 'co2_c': 6, 'atp_c': atp_per_glucose})
    _add_reaction(model, 'FERM', {'glc_D_c': -1, 'adp_c': -2, 'pi_c': -2,
                                  'lac_L_c': 2, 'atp_c': 2})
    if atp_leak:
        _add_reaction(model, 'FREE_ATP', {'adp_c': -1, 'pi_c': -1, 'atp_c': 1})
    if atp_demand:
        _add_reaction(model, 'DM_atp_c_', {'atp_c': -1, 'adp_c': 1, 'pi_c': 1})

    model.objective = 'FERM'
    return model


@pytest.fixture
def toy_model():
    return build_toy_model()


@pytest.fixture
def glucose_diet():
    return pd.DataFrame({'reaction': ['EX_glc_D(e)', 'EX_o2(e)'], 'flux': [-1.0, -10.0]})


@pytest.fixture
def diet_file(tmp_path):
    path = tmp_path / 'glucose_diet.tsv'
    path.write_text("reaction\tflux\nEX_glc_D(e)\t-1\nEX_o2(e)\t-10\n", encoding='utf-8')
    return str(path)


@pytest.fixture
def refined_folder(tmp_path):
    """Two plausible models, one leaking ATP, one only too high with oxygen, plus noise."""
    folder = tmp_path / 'refined'
    folder.mkdir()
    cobra.io.save_json_model(build_toy_model('good_1'), str(folder / 'good_1.json'))
    cobra.io.save_json_model(build_toy_model('good_2', atp_demand=False), str(folder / 'good_2.json'))
    cobra.io.save_json_model(build_toy_model('leaky', atp_leak=True), str(folder / 'leaky.json'))
    cobra.io.save_json_model(build_toy_model('aerobic_high', atp_per_glucose=200),
                             str(folder / 'aerobic_high.json'))
    (folder / 'README.txt').write_text("not a model", encoding='utf-8')
    (folder / 'subdir.json').mkdir()
    return str(folder)


@pytest.fixture
def drafts_folder(tmp_path):
    folder = tmp_path / 'drafts'
    folder.mkdir()
    cobra.io.save_json_model(build_toy_model('good_1', atp_leak=True), str(folder / 'good_1.json'))
    cobra.io.save_json_model(build_toy_model('draft_ok'), str(folder / 'draft_ok.json'))
    return str(folder)
