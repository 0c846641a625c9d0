import pandas as pd
import pytest

from atp_screen.diet import apply_diet, find_exchange, load_diet


def test_packaged_western_diet():
    diet = load_diet()

    assert list(diet.columns) == ['reaction', 'flux']
    assert diet['reaction'].is_unique
    assert (diet['flux'] < 0).all()
    assert diet.set_index('reaction').loc['EX_o2(e)', 'flux'] == -10


def test_load_diet_missing_columns(tmp_path):
    path = tmp_path / 'bad.tsv'
    path.write_text("rxn\tvalue\nEX_glc_D(e)\t-1\n", encoding='utf-8')

    with pytest.raises(ValueError, match='missing columns'):
        load_diet(str(path))


def test_load_diet_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_diet(str(tmp_path / 'none.tsv'))


def test_find_exchange_notations(toy_model):
    for rxn_id in ('EX_glc_D(e)', 'EX_glc_D[e]', 'EX_glc_D_e'):
        assert find_exchange(toy_model, rxn_id).id == 'EX_glc_D_e'
    assert find_exchange(toy_model, 'EX_fru(e)') is None


def test_apply_diet_closes_other_uptakes(toy_model, glucose_diet):
    applied = apply_diet(toy_model, glucose_diet)

    assert applied == 2
    assert toy_model.reactions.EX_glc_D_e.lower_bound == -1
    assert toy_model.reactions.EX_o2_e.lower_bound == -10
    assert toy_model.reactions.EX_co2_e.bounds == (0, 1000)
    assert toy_model.reactions.EX_lac_L_e.bounds == (0, 1000)
    # internal reactions untouched
    assert toy_model.reactions.GLCt.bounds == (0, 1000)


def test_apply_diet_skips_unknown_exchanges(toy_model):
    diet = pd.DataFrame({'reaction': ['EX_fru(e)', 'EX_glc_D(e)'], 'flux': [-0.5, -2.0]})

    assert apply_diet(toy_model, diet) == 1
    assert toy_model.reactions.EX_glc_D_e.lower_bound == -2
